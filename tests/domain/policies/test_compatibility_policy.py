import pytest

from conftest import audio, data, subtitle, video
from tvcompat.domain.entities.probe import ContainerInfo
from tvcompat.domain.enums.codec import ClassificationReason
from tvcompat.domain.policies.compatibility import (
    EXCLUDED_MPEG4_TAGS,
    classify_stream,
    evaluate,
    is_audio_supported,
    is_bitmap_subtitle,
    is_container_supported,
    is_subtitle_supported,
    is_text_subtitle,
    is_video_supported,
    video_reason,
)


@pytest.mark.parametrize("codec", ["h264", "hevc", "mpeg2video", "vp9", "av1", "mjpeg", "png"])
def test_allowed_video_codecs(codec):
    assert is_video_supported(codec)


@pytest.mark.parametrize("codec", ["vc1", "wmv3", "theora", "msmpeg4v3", "", None])
def test_other_video_codecs_rejected(codec):
    assert not is_video_supported(codec)
    assert video_reason(codec) is ClassificationReason.CODEC_NOT_ALLOWED


@pytest.mark.parametrize("tag", sorted(EXCLUDED_MPEG4_TAGS))
@pytest.mark.parametrize("profile", [None, "Simple Profile", "Advanced Simple Profile"])
def test_mpeg4_excluded_tags_rejected_regardless_of_profile(tag, profile):
    assert video_reason("mpeg4", tag, profile) is ClassificationReason.CODEC_TAG_EXCLUDED
    assert not is_video_supported("mpeg4", tag, profile)


@pytest.mark.parametrize("profile", ["Advanced Simple Profile", "Simple Studio Profile", "advanced_simple"])
def test_mpeg4_excluded_profiles_rejected(profile):
    assert video_reason("mpeg4", "M4S2", profile) is ClassificationReason.PROFILE_EXCLUDED
    assert video_reason("mpeg4", None, profile) is ClassificationReason.PROFILE_EXCLUDED


def test_mpeg4_tag_match_is_case_sensitive():
    # "XviD" is not one of the listed spellings
    assert is_video_supported("mpeg4", "XviD", "Simple Profile")


def test_mpeg4_plain_is_accepted():
    assert is_video_supported("mpeg4", None, None)
    assert is_video_supported("mpeg4", "M4S2", "Simple Profile")


@pytest.mark.parametrize(
    "codec", ["aac", "ac3", "eac3", "mp3", "pcm_s16le", "flac", "vorbis", "opus", "wmav2"]
)
def test_allowed_audio_codecs(codec):
    assert is_audio_supported(codec)


@pytest.mark.parametrize("codec", ["dts", "truehd", "pcm_s24le", "wmapro", "mp2"])
def test_other_audio_codecs_rejected(codec):
    assert not is_audio_supported(codec)


@pytest.mark.parametrize("codec", ["subrip", "ass", "ssa", "webvtt", "mov_text", "microdvd", "text"])
def test_text_subtitles_supported_and_text(codec):
    assert is_subtitle_supported(codec)
    assert is_text_subtitle(codec)
    assert not is_bitmap_subtitle(codec)


@pytest.mark.parametrize("codec", ["hdmv_pgs_subtitle", "dvd_subtitle"])
def test_bitmap_subtitles(codec):
    assert not is_subtitle_supported(codec)
    assert not is_text_subtitle(codec)
    assert is_bitmap_subtitle(codec)

    r = classify_stream(subtitle(2, codec))
    assert r.supported is False
    assert r.reason is ClassificationReason.SUBTITLE_BITMAP_UNSUPPORTED
    assert r.is_bitmap_subtitle
    assert not r.needs_reencode


def test_unknown_subtitle_is_transcodable():
    r = classify_stream(subtitle(2, "dvb_teletext"))
    assert r.reason is ClassificationReason.SUBTITLE_TEXT_UNSUPPORTED
    assert r.needs_reencode


@pytest.mark.parametrize(
    "name",
    ["mov,mp4,m4a,3gp,3g2,mj2", "matroska,webm", "avi", "mpegts", "asf", "ogg", "wav", "flac", "mp3"],
)
def test_container_substring_match(name):
    assert is_container_supported(name)


@pytest.mark.parametrize("name", ["flv", "rm", "mpeg", "", None])
def test_container_rejected(name):
    assert not is_container_supported(name)


def test_classify_other_stream_raises():
    with pytest.raises(ValueError):
        classify_stream(data(3))


# ---- evaluate() ----------------------------------------------------------------

def test_evaluate_all_supported():
    out = evaluate(ContainerInfo("avi"), [video(0, "h264"), audio(1, "mp3")])
    assert out.container_supported
    assert out.all_supported
    assert not out.can_transcode
    assert out.has_video and out.has_audio
    assert not out.is_unfixable


def test_evaluate_xvid_avi_is_transcodable():
    out = evaluate(ContainerInfo("avi"), [video(0, "mpeg4", tag="XVID"), audio(1, "aac")])
    assert out.container_supported
    assert not out.all_supported
    assert out.can_transcode
    assert out.stream_results[0].reason is ClassificationReason.CODEC_TAG_EXCLUDED
    assert out.stream_results[1].supported


def test_evaluate_pgs_only_problem_is_unfixable():
    out = evaluate(
        ContainerInfo("matroska,webm"),
        [video(0, "hevc"), audio(1, "eac3"), subtitle(2, "hdmv_pgs_subtitle")],
    )
    assert out.all_supported is False
    assert out.can_transcode is False
    assert out.has_unsupported_bitmap_subtitle is True
    assert out.is_unfixable


def test_evaluate_skips_non_media_streams():
    out = evaluate(ContainerInfo("matroska"), [video(0, "h264"), data(1, "ttf"), audio(2, "aac")])
    assert [r.stream.index for r in out.stream_results] == [0, 2]
    assert out.all_supported


def test_evaluate_unsupported_container_alone():
    out = evaluate(ContainerInfo("flv"), [video(0, "h264"), audio(1, "aac")])
    assert not out.container_supported
    assert not out.all_supported
    assert not out.can_transcode


def test_evaluate_unknown_container():
    out = evaluate(ContainerInfo(None), [audio(0, "aac")])
    assert not out.container_supported
    assert out.container.display_name == "unknown"
    assert not out.has_video and out.has_audio
