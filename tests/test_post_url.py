import pytest

from core.domain.post_url import build_api_url, extract_shortcode, is_valid_post_url


@pytest.mark.parametrize(
    "url",
    [
        "https://www.instagram.com/p/ABC123xyz/",
        "https://instagram.com/reel/XYZ/",
        "http://instagram.com/reels/a_b-c",
        "HTTPS://WWW.INSTAGRAM.COM/REEL/Cx9",
        "https://instagr.am/p/short_code/?igsh=abc",
    ],
)
def test_accepts_post_urls(url):
    assert is_valid_post_url(url)


@pytest.mark.parametrize(
    "url",
    [
        "not-a-url",
        "",
        "ftp://instagram.com/p/ABC/",
        "https://www.instagram.com/someuser/",
        "https://www.instagram.com/stories/someuser/123/",
        "https://evil-instagram.com/p/ABC/",
        "https://m.instagram.com/p/ABC/",
        "https://www.instagram.com/p/",
    ],
)
def test_rejects_other_urls(url):
    assert not is_valid_post_url(url)


def test_rejects_non_strings():
    assert is_valid_post_url(None) is False  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://www.instagram.com/p/ABC123xyz/", "ABC123xyz"),
        ("https://instagram.com/reel/XYZ/", "XYZ"),
        ("https://www.instagram.com/reels/Dq-_9z/?utm_source=ig_web", "Dq-_9z"),
        ("https://instagr.am/p/a1", "a1"),
    ],
)
def test_extracts_shortcode(url, expected):
    assert extract_shortcode(url) == expected


def test_shortcode_missing():
    assert extract_shortcode("https://www.instagram.com/explore/") is None


def test_build_api_url():
    assert build_api_url("XYZ") == "https://www.instagram.com/p/XYZ/?__a=1&__d=dis"
