# File: vidvoice/features/command_grammar/data/phrase_table.py
from typing import Dict, List
from vidvoice.core.common.enums import CommandId

SUPPORTED_LANGUAGES = ["en", "zh-TW", "zh-CN", "es", "pt", "pt-BR", "de", "fr", "ru", "ar", "ja", "ko"]

# Matching walks this table top to bottom and stops at the first command whose
# phrase is contained in the transcript. Commands whose phrases contain another
# command's phrase ("exit fullscreen" > "fullscreen", "unmute" > "mute") must
# come first. Generic transport commands (pause/stop/play) come last.
BUILTIN_PHRASES: Dict[CommandId, Dict[str, List[str]]] = {
    CommandId.EXIT_FULLSCREEN: {
        "en": ["exit fullscreen", "exit full screen", "leave fullscreen"],
        "zh-TW": ["離開全螢幕", "退出全螢幕"],
        "zh-CN": ["退出全屏", "离开全屏"],
        "es": ["salir de pantalla completa", "salir pantalla completa"],
        "pt": ["sair do ecrã inteiro", "sair de ecrã completo"],
        "pt-BR": ["sair da tela cheia", "sair de tela cheia"],
        "de": ["vollbild beenden", "vollbild verlassen"],
        "fr": ["quitter le plein écran", "quitter plein écran"],
        "ru": ["выйти из полного экрана", "выход из полноэкранного режима"],
        "ar": ["الخروج من ملء الشاشة"],
        "ja": ["フルスクリーン終了", "全画面終了"],
        "ko": ["전체화면 나가기", "전체 화면 종료"],
    },
    CommandId.FULLSCREEN: {
        "en": ["fullscreen", "full screen"],
        "zh-TW": ["全螢幕"],
        "zh-CN": ["全屏"],
        "es": ["pantalla completa"],
        "pt": ["ecrã inteiro", "ecrã completo"],
        "pt-BR": ["tela cheia"],
        "de": ["vollbild"],
        "fr": ["plein écran"],
        "ru": ["полный экран", "полноэкранный режим"],
        "ar": ["ملء الشاشة"],
        "ja": ["フルスクリーン", "全画面"],
        "ko": ["전체화면", "전체 화면"],
    },
    CommandId.UNMUTE: {
        "en": ["unmute", "sound on"],
        "zh-TW": ["解除靜音"],
        "zh-CN": ["取消静音"],
        "es": ["activar sonido", "quitar silencio"],
        "pt": ["ativar o som", "ligar o som"],
        "pt-BR": ["ativar som", "tirar do mudo"],
        "de": ["ton einschalten", "stummschaltung aufheben"],
        "fr": ["activer le son", "réactiver le son"],
        "ru": ["включить звук"],
        "ar": ["إلغاء كتم الصوت"],
        "ja": ["ミュート解除"],
        "ko": ["음소거 해제"],
    },
    CommandId.MUTE: {
        "en": ["mute"],
        "zh-TW": ["靜音"],
        "zh-CN": ["静音"],
        "es": ["silenciar"],
        "pt": ["silenciar", "sem som"],
        "pt-BR": ["mudo", "silenciar"],
        "de": ["stumm"],
        "fr": ["couper le son", "muet"],
        "ru": ["без звука", "выключить звук"],
        "ar": ["كتم الصوت"],
        "ja": ["ミュート", "消音"],
        "ko": ["음소거"],
    },
    CommandId.VOLUME_MAX: {
        "en": ["max volume", "maximum volume", "volume max"],
        "zh-TW": ["音量最大", "最大音量"],
        "zh-CN": ["音量调到最大", "最大音量"],
        "es": ["volumen máximo"],
        "pt": ["volume máximo"],
        "pt-BR": ["volume no máximo", "volume máximo"],
        "de": ["maximale lautstärke", "volle lautstärke"],
        "fr": ["volume maximum", "son au maximum"],
        "ru": ["максимальная громкость"],
        "ar": ["أقصى صوت", "الصوت إلى الأقصى"],
        "ja": ["音量を最大に", "音量最大"],
        "ko": ["최대 볼륨", "볼륨 최대"],
    },
    CommandId.VOLUME_UP: {
        "en": ["volume up", "louder", "increase volume"],
        "zh-TW": ["音量調高", "大聲一點"],
        "zh-CN": ["音量调高", "大声一点"],
        "es": ["subir volumen", "más volumen"],
        "pt": ["aumentar o volume"],
        "pt-BR": ["aumentar volume", "mais alto"],
        "de": ["lauter"],
        "fr": ["augmenter le volume", "plus fort"],
        "ru": ["громче"],
        "ar": ["رفع الصوت"],
        "ja": ["音量を上げる", "音量上げる"],
        "ko": ["볼륨 올리기", "소리 크게"],
    },
    CommandId.VOLUME_DOWN: {
        "en": ["volume down", "quieter", "decrease volume"],
        "zh-TW": ["音量調低", "小聲一點"],
        "zh-CN": ["音量调低", "小声一点"],
        "es": ["bajar volumen", "menos volumen"],
        "pt": ["diminuir o volume"],
        "pt-BR": ["diminuir volume", "mais baixo"],
        "de": ["leiser"],
        "fr": ["baisser le volume", "moins fort"],
        "ru": ["тише"],
        "ar": ["خفض الصوت"],
        "ja": ["音量を下げる", "音量下げる"],
        "ko": ["볼륨 내리기", "소리 작게"],
    },
    CommandId.FORWARD_10: {
        "en": ["forward 10", "skip 10", "forward ten"],
        "zh-TW": ["快轉10秒", "向前十秒"],
        "zh-CN": ["快进10秒", "前进10秒"],
        "es": ["adelantar 10"],
        "pt": ["avançar 10"],
        "pt-BR": ["pular 10", "avançar 10"],
        "de": ["vorspulen 10", "10 sekunden vor"],
        "fr": ["avancer 10"],
        "ru": ["вперед 10", "вперёд на 10"],
        "ar": ["تقديم 10"],
        "ja": ["10秒進む", "10秒早送り"],
        "ko": ["10초 앞으로"],
    },
    CommandId.FORWARD_20: {
        "en": ["forward 20", "skip 20", "forward twenty"],
        "zh-TW": ["快轉20秒", "向前二十秒"],
        "zh-CN": ["快进20秒", "前进20秒"],
        "es": ["adelantar 20"],
        "pt": ["avançar 20"],
        "pt-BR": ["pular 20", "avançar 20"],
        "de": ["vorspulen 20", "20 sekunden vor"],
        "fr": ["avancer 20"],
        "ru": ["вперед 20", "вперёд на 20"],
        "ar": ["تقديم 20"],
        "ja": ["20秒進む", "20秒早送り"],
        "ko": ["20초 앞으로"],
    },
    CommandId.FORWARD_30: {
        "en": ["forward 30", "skip 30", "forward thirty"],
        "zh-TW": ["快轉30秒", "向前三十秒"],
        "zh-CN": ["快进30秒", "前进30秒"],
        "es": ["adelantar 30"],
        "pt": ["avançar 30"],
        "pt-BR": ["pular 30", "avançar 30"],
        "de": ["vorspulen 30", "30 sekunden vor"],
        "fr": ["avancer 30"],
        "ru": ["вперед 30", "вперёд на 30"],
        "ar": ["تقديم 30"],
        "ja": ["30秒進む", "30秒早送り"],
        "ko": ["30초 앞으로"],
    },
    CommandId.BACKWARD_10: {
        "en": ["backward 10", "rewind 10", "back 10"],
        "zh-TW": ["倒轉10秒", "向後十秒"],
        "zh-CN": ["快退10秒", "后退10秒"],
        "es": ["retroceder 10"],
        "pt": ["recuar 10"],
        "pt-BR": ["voltar 10"],
        "de": ["zurückspulen 10", "10 sekunden zurück"],
        "fr": ["reculer 10"],
        "ru": ["назад 10"],
        "ar": ["تراجع 10"],
        "ja": ["10秒戻る", "10秒巻き戻し"],
        "ko": ["10초 뒤로"],
    },
    CommandId.BACKWARD_20: {
        "en": ["backward 20", "rewind 20", "back 20"],
        "zh-TW": ["倒轉20秒", "向後二十秒"],
        "zh-CN": ["快退20秒", "后退20秒"],
        "es": ["retroceder 20"],
        "pt": ["recuar 20"],
        "pt-BR": ["voltar 20"],
        "de": ["zurückspulen 20", "20 sekunden zurück"],
        "fr": ["reculer 20"],
        "ru": ["назад 20"],
        "ar": ["تراجع 20"],
        "ja": ["20秒戻る", "20秒巻き戻し"],
        "ko": ["20초 뒤로"],
    },
    CommandId.BACKWARD_30: {
        "en": ["backward 30", "rewind 30", "back 30"],
        "zh-TW": ["倒轉30秒", "向後三十秒"],
        "zh-CN": ["快退30秒", "后退30秒"],
        "es": ["retroceder 30"],
        "pt": ["recuar 30"],
        "pt-BR": ["voltar 30"],
        "de": ["zurückspulen 30", "30 sekunden zurück"],
        "fr": ["reculer 30"],
        "ru": ["назад 30"],
        "ar": ["تراجع 30"],
        "ja": ["30秒戻る", "30秒巻き戻し"],
        "ko": ["30초 뒤로"],
    },
    CommandId.SPEED_125: {
        "en": ["1.25 speed", "1.25x speed"],
        "zh-TW": ["1.25倍速"],
        "zh-CN": ["1.25倍速"],
        "es": ["velocidad 1.25"],
        "pt": ["velocidade 1.25"],
        "pt-BR": ["velocidade 1.25"],
        "de": ["geschwindigkeit 1.25"],
        "fr": ["vitesse 1.25"],
        "ru": ["скорость 1.25"],
        "ar": ["سرعة 1.25"],
        "ja": ["1.25倍速"],
        "ko": ["1.25배속"],
    },
    CommandId.SPEED_15: {
        "en": ["1.5 speed", "1.5x speed", "faster"],
        "zh-TW": ["1.5倍速"],
        "zh-CN": ["1.5倍速", "加快"],
        "es": ["velocidad 1.5"],
        "pt": ["velocidade 1.5"],
        "pt-BR": ["velocidade 1.5"],
        "de": ["geschwindigkeit 1.5"],
        "fr": ["vitesse 1.5"],
        "ru": ["скорость 1.5"],
        "ar": ["سرعة 1.5"],
        "ja": ["1.5倍速"],
        "ko": ["1.5배속"],
    },
    CommandId.SPEED_05: {
        "en": ["0.5 speed", "half speed", "slower"],
        "zh-TW": ["0.5倍速", "半速"],
        "zh-CN": ["0.5倍速", "半速"],
        "es": ["velocidad 0.5"],
        "pt": ["velocidade 0.5"],
        "pt-BR": ["velocidade 0.5"],
        "de": ["geschwindigkeit 0.5"],
        "fr": ["vitesse 0.5"],
        "ru": ["скорость 0.5"],
        "ar": ["سرعة 0.5"],
        "ja": ["0.5倍速"],
        "ko": ["0.5배속"],
    },
    CommandId.SPEED_2: {
        "en": ["2x speed", "double speed", "2 speed"],
        "zh-TW": ["2倍速", "兩倍速"],
        "zh-CN": ["2倍速", "两倍速"],
        "es": ["velocidad 2", "doble velocidad"],
        "pt": ["velocidade 2", "velocidade dupla"],
        "pt-BR": ["velocidade 2", "velocidade dupla"],
        "de": ["geschwindigkeit 2", "doppelte geschwindigkeit"],
        "fr": ["vitesse 2", "double vitesse"],
        "ru": ["скорость 2", "двойная скорость"],
        "ar": ["سرعة 2"],
        "ja": ["2倍速"],
        "ko": ["2배속"],
    },
    CommandId.SPEED_1: {
        "en": ["normal speed", "regular speed", "1x speed"],
        "zh-TW": ["正常速度"],
        "zh-CN": ["正常速度", "原速"],
        "es": ["velocidad normal"],
        "pt": ["velocidade normal"],
        "pt-BR": ["velocidade normal"],
        "de": ["normale geschwindigkeit"],
        "fr": ["vitesse normale"],
        "ru": ["обычная скорость", "нормальная скорость"],
        "ar": ["السرعة العادية"],
        "ja": ["通常速度", "等速"],
        "ko": ["정상 속도", "보통 속도"],
    },
    CommandId.BOOKMARK: {
        "en": ["bookmark", "add bookmark"],
        "zh-TW": ["書籤", "加書籤"],
        "zh-CN": ["书签"],
        "es": ["marcador"],
        "pt": ["marcador"],
        "pt-BR": ["marcador"],
        "de": ["lesezeichen"],
        "fr": ["marque-page", "signet"],
        "ru": ["закладка"],
        "ar": ["إشارة مرجعية"],
        "ja": ["ブックマーク"],
        "ko": ["북마크"],
    },
    CommandId.FAVORITE: {
        "en": ["favorite", "favourite", "add to favorites"],
        "zh-TW": ["最愛", "加入最愛"],
        "zh-CN": ["收藏"],
        "es": ["favorito"],
        "pt": ["favorito"],
        "pt-BR": ["favoritar", "favorito"],
        "de": ["favorit"],
        "fr": ["favori"],
        "ru": ["избранное"],
        "ar": ["مفضل", "المفضلة"],
        "ja": ["お気に入り"],
        "ko": ["즐겨찾기"],
    },
    CommandId.PAUSE: {
        "en": ["pause"],
        "zh-TW": ["暫停"],
        "zh-CN": ["暂停"],
        "es": ["pausar", "pausa"],
        "pt": ["pausar"],
        "pt-BR": ["pausar", "pausa"],
        "de": ["pausieren", "pause"],
        "fr": ["pause", "mettre en pause"],
        "ru": ["пауза"],
        "ar": ["إيقاف مؤقت"],
        "ja": ["一時停止"],
        "ko": ["일시정지"],
    },
    CommandId.STOP: {
        "en": ["stop", "stop video"],
        "zh-TW": ["停止"],
        "zh-CN": ["停止", "停止播放"],
        "es": ["parar", "detener"],
        "pt": ["parar"],
        "pt-BR": ["parar"],
        "de": ["stoppen", "anhalten"],
        "fr": ["arrêter", "arrêt"],
        "ru": ["остановить", "стоп"],
        "ar": ["توقف"],
        "ja": ["停止", "ストップ"],
        "ko": ["정지", "멈춰"],
    },
    CommandId.PLAY: {
        "en": ["play", "resume", "start"],
        "zh-TW": ["播放", "開始播放"],
        "zh-CN": ["播放", "开始播放"],
        "es": ["reproducir"],
        "pt": ["reproduzir"],
        "pt-BR": ["tocar", "reproduzir"],
        "de": ["abspielen", "wiedergabe"],
        "fr": ["lecture", "jouer"],
        "ru": ["воспроизвести", "играть"],
        "ar": ["تشغيل"],
        "ja": ["再生"],
        "ko": ["재생"],
    },
}
