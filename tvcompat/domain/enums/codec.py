# tvcompat/domain/enums/codec.py
from __future__ import annotations

from enum import StrEnum


# Names are ffprobe's `codec_name` values.
class VideoCodec(StrEnum):
    H264 = "h264"
    HEVC = "hevc"
    MPEG2 = "mpeg2video"
    MPEG4 = "mpeg4"
    VP9 = "vp9"
    AV1 = "av1"
    MJPEG = "mjpeg"
    PNG = "png"


class AudioCodec(StrEnum):
    AAC = "aac"
    AC3 = "ac3"
    EAC3 = "eac3"
    MP3 = "mp3"
    PCM_S16LE = "pcm_s16le"
    FLAC = "flac"
    VORBIS = "vorbis"
    OPUS = "opus"
    WMAV2 = "wmav2"


class SubtitleCodec(StrEnum):
    SUBRIP = "subrip"
    ASS = "ass"
    SSA = "ssa"
    WEBVTT = "webvtt"
    MOV_TEXT = "mov_text"
    MICRODVD = "microdvd"
    TEXT = "text"
    PGS = "hdmv_pgs_subtitle"
    DVD = "dvd_subtitle"


class ClassificationReason(StrEnum):
    CODEC_ALLOWED = "codec-allowed"
    CODEC_NOT_ALLOWED = "codec-not-allowed"
    CODEC_TAG_EXCLUDED = "codec-tag-excluded"
    PROFILE_EXCLUDED = "profile-excluded"
    SUBTITLE_BITMAP_UNSUPPORTED = "subtitle-bitmap-unsupported"
    SUBTITLE_TEXT_UNSUPPORTED = "subtitle-text-unsupported"


class FileVerdict(StrEnum):
    ok = "ok"
    not_supported = "not-supported"
    error = "error"
    skipped = "skipped"
