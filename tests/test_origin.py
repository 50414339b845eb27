import pytest

from chat_proxy.origin import OriginPolicy

SITE = "https://portfolio.example.com"
DEV = "http://localhost:5173"


@pytest.fixture
def policy() -> OriginPolicy:
    return OriginPolicy([SITE, DEV])


@pytest.mark.parametrize(
    ("origin", "referer"),
    [
        (SITE, None),
        (DEV, None),
        (None, None),
        ("", None),
        ("https://evil.example.net", f"{SITE}/projects"),
    ],
)
def test_allowed_requests(policy: OriginPolicy, origin: str | None, referer: str | None) -> None:
    assert policy.is_allowed(origin, referer) is True


@pytest.mark.parametrize(
    ("origin", "referer"),
    [
        ("https://evil.example.net", None),
        ("https://evil.example.net", "https://evil.example.net/page"),
        ("https://portfolio.example.com.evil.net", None),
    ],
)
def test_rejected_requests(policy: OriginPolicy, origin: str, referer: str | None) -> None:
    assert policy.is_allowed(origin, referer) is False


def test_missing_origin_can_be_rejected() -> None:
    policy = OriginPolicy([SITE], allow_missing_origin=False)

    assert policy.is_allowed(None, None) is False
    assert policy.is_allowed(None, f"{SITE}/about") is True


def test_referer_prefix_can_be_disabled() -> None:
    policy = OriginPolicy([SITE], allow_referer_prefix=False)

    assert policy.is_allowed("https://evil.example.net", f"{SITE}/about") is False


def test_cors_headers_echo_matched_origin(policy: OriginPolicy) -> None:
    headers = policy.cors_headers(DEV)

    assert headers["Access-Control-Allow-Origin"] == DEV
    assert headers["Access-Control-Allow-Methods"] == "POST, OPTIONS"
    assert headers["Vary"] == "Origin"
    assert "content-type" in headers["Access-Control-Allow-Headers"]


def test_cors_headers_fall_back_to_default(policy: OriginPolicy) -> None:
    assert policy.cors_headers("https://evil.example.net")["Access-Control-Allow-Origin"] == SITE
    assert policy.cors_headers(None)["Access-Control-Allow-Origin"] == SITE


def test_empty_allow_list_requires_default() -> None:
    with pytest.raises(ValueError):
        OriginPolicy([])
