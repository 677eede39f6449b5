DEFAULT_LOCALE = "en-US"

# UI language -> speech engine locale
SPEECH_LOCALES = {
    "en": "en-US",
    "zh-TW": "zh-TW",
    "zh-CN": "zh-CN",
    "es": "es-ES",
    "pt": "pt-PT",
    "pt-BR": "pt-BR",
    "de": "de-DE",
    "fr": "fr-FR",
    "ru": "ru-RU",
    "ar": "ar-SA",
    "ja": "ja-JP",
    "ko": "ko-KR",
}


def speech_locale(language) -> str:
    return SPEECH_LOCALES.get(language, DEFAULT_LOCALE)
