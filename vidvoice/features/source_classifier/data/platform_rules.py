import re
from typing import List
from ..domain.models import PlatformRule

_VIDEO_EXTS = r"(mp4|webm|ogg|ogv|mov|avi|mkv|flv|wmv|m4v)"
_WEB_EXTS = r"(mp4|webm|ogg|ogv)"


class PlatformRules:
    """
    Central table of URL patterns, grouped by support tier.
    Order inside each list matters: the first matching rule wins.
    The lists are data, not logic; extend them by subclassing.
    """

    # Playable directly, or through a known embed player.
    SUPPORTED: List[PlatformRule] = [
        # Direct video files
        PlatformRule.of(rf".*\.{_VIDEO_EXTS}$", "Direct Video", re.IGNORECASE),
        PlatformRule.of(r".*\.mp4(\?.*)?$", "Direct Video", re.IGNORECASE),
        PlatformRule.of(rf".*/(video|media)/.*\.{_VIDEO_EXTS}", "Direct Video", re.IGNORECASE),

        # Streaming formats
        PlatformRule.of(r".*\.m3u8([?#].*)?$", "HLS Stream", re.IGNORECASE),
        PlatformRule.of(r".*\.mpd([?#].*)?$", "DASH Stream", re.IGNORECASE),
        PlatformRule.of(r"^rtmp://.*", "RTMP Stream"),

        # Embed platforms (id extracted)
        PlatformRule.of(
            r"(?:youtube\.com/(?:watch\?(?:.*&)?v=|embed/|v/|shorts/)|youtu\.be/)[\w-]+",
            "YouTube", re.IGNORECASE,
        ),
        PlatformRule.of(r"vimeo\.com/(?:[\w-]+/)*\d+", "Vimeo"),

        # Video platforms
        PlatformRule.of(r"twitch\.tv/videos/\d+", "Twitch"),
        PlatformRule.of(r"twitch\.tv/\w+", "Twitch"),
        PlatformRule.of(r"facebook\.com/watch/\?v=\d+", "Facebook"),
        PlatformRule.of(r"fb\.watch/[\w-]+", "Facebook"),

        # Cloud storage (rewritten to direct download links)
        PlatformRule.of(r"drive\.google\.com/file/d/[\w-]+/view", "Google Drive"),
        PlatformRule.of(r"drive\.google\.com/open\?id=[\w-]+", "Google Drive"),
        PlatformRule.of(rf"dropbox\.com/s/[\w-]+/.*\.{_WEB_EXTS}", "Dropbox"),
        PlatformRule.of(rf"dropbox\.com/scl/fi/[\w-]+/.*\.{_WEB_EXTS}", "Dropbox"),

        # CDN and hosting services
        PlatformRule.of(rf".*\.cloudfront\.net/.*\.{_WEB_EXTS}", "CloudFront CDN"),
        PlatformRule.of(rf".*\.amazonaws\.com/.*\.{_WEB_EXTS}", "AWS S3"),
        PlatformRule.of(rf"commondatastorage\.googleapis\.com/.*\.{_WEB_EXTS}", "Google Storage"),
        PlatformRule.of(rf".*\.googleapis\.com/.*\.{_WEB_EXTS}", "Google Cloud"),
    ]

    # Recognized, may work, unverified.
    EXTENDED: List[PlatformRule] = [
        # Social media
        PlatformRule.of(r"twitter\.com/.*/status/\d+", "Twitter"),
        PlatformRule.of(r"(?:^|[/.])x\.com/.*/status/\d+", "X (Twitter)"),
        PlatformRule.of(r"instagram\.com/(reel|p|tv)/[\w-]+", "Instagram"),
        PlatformRule.of(r"instagram\.com/stories/[\w.-]+/\d+", "Instagram Stories"),
        PlatformRule.of(r"tiktok\.com/@[\w.-]+/video/\d+", "TikTok"),
        PlatformRule.of(r"reddit\.com/r/\w+/comments/[\w-]+", "Reddit"),
        PlatformRule.of(r"v\.redd\.it/[\w-]+", "Reddit Video"),

        # International platforms
        PlatformRule.of(r"bilibili\.com/video/[A-Za-z0-9]+", "Bilibili"),
        PlatformRule.of(r"youku\.com/v_show/id_[\w=]+", "Youku"),
        PlatformRule.of(r"iqiyi\.com/v_[\w-]+", "iQiyi"),
        PlatformRule.of(r"qq\.com/x/cover/[\w-]+", "Tencent Video"),
        PlatformRule.of(r"weibo\.com/tv/show/\d+", "Weibo Video"),
        PlatformRule.of(r"douyin\.com/video/\d+", "Douyin"),
        PlatformRule.of(r"nicovideo\.jp/watch/[\w]+", "Niconico"),

        # Live streaming
        PlatformRule.of(r"youtube\.com/live/[\w-]+", "YouTube Live"),
        PlatformRule.of(r"kick\.com/[\w-]+", "Kick"),

        # File hosting
        PlatformRule.of(r"mediafire\.com/file/[\w-]+", "MediaFire"),
        PlatformRule.of(r"mega\.nz/(file|embed)/[\w-]+", "MEGA"),
        PlatformRule.of(r"sendvid\.com/[\w-]+", "SendVid"),
        PlatformRule.of(r"streamable\.com/[\w-]+", "Streamable"),
        PlatformRule.of(r"dailymotion\.com/video/[\w-]+", "Dailymotion"),
    ]

    # Known walled / DRM services, matched to give an actionable message.
    UNSUPPORTED: List[PlatformRule] = [
        # DRM-protected streaming services
        PlatformRule.of(r"netflix\.com", "Netflix"),
        PlatformRule.of(r"disneyplus\.com", "Disney+"),
        PlatformRule.of(r"hbomax\.com", "HBO Max"),
        PlatformRule.of(r"hbo\.com", "HBO"),
        PlatformRule.of(r"primevideo\.com", "Amazon Prime Video"),
        PlatformRule.of(r"amazon\.com/gp/video", "Amazon Prime Video"),
        PlatformRule.of(r"tv\.apple\.com", "Apple TV+"),
        PlatformRule.of(r"apple\.com/tv", "Apple TV+"),
        PlatformRule.of(r"hulu\.com", "Hulu"),
        PlatformRule.of(r"peacocktv\.com", "Peacock"),
        PlatformRule.of(r"paramountplus\.com", "Paramount+"),
        PlatformRule.of(r"crunchyroll\.com", "Crunchyroll"),

        # Regional streaming services
        PlatformRule.of(r"bbc\.co\.uk/iplayer", "BBC iPlayer"),
        PlatformRule.of(r"itv\.com/hub", "ITV Hub"),
        PlatformRule.of(r"cbc\.ca/player", "CBC Gem"),
        PlatformRule.of(r"sbs\.com\.au/ondemand", "SBS On Demand"),

        # Music streaming
        PlatformRule.of(r"spotify\.com", "Spotify"),
        PlatformRule.of(r"music\.apple\.com", "Apple Music"),
        PlatformRule.of(r"tidal\.com", "Tidal"),

        # Educational platforms with DRM
        PlatformRule.of(r"coursera\.org", "Coursera"),
        PlatformRule.of(r"udemy\.com", "Udemy"),
        PlatformRule.of(r"linkedin\.com/learning", "LinkedIn Learning"),

        # Live TV services
        PlatformRule.of(r"sling\.com", "Sling TV"),
        PlatformRule.of(r"youtubetv\.com", "YouTube TV"),
        PlatformRule.of(r"fubo\.tv", "fuboTV"),
    ]

    # Platforms that need their own player widget instead of the media engine.
    EMBED_PLATFORMS = {"YouTube", "Vimeo"}

    # Platforms the UI treats specially (custom controls, limited seeking).
    SPECIAL_HANDLING_PLATFORMS = {"YouTube", "Vimeo", "Twitch", "Facebook", "Instagram", "TikTok"}

    DIRECT_VIDEO_EXTENSIONS = {"mp4", "webm", "ogg", "ogv", "mov", "avi", "mkv", "flv", "wmv", "m4v"}
    STREAMING_EXTENSIONS = {"m3u8", "mpd"}
