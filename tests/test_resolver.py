import pytest

from asset_resolver.config import LAST_RESORT_IMAGE, DefaultImages, ResolverConfig
from asset_resolver.models import ImageOptions
from asset_resolver.resolver import UrlResolver

THUMBNAIL_URL = "http://localhost:8000/uploads/1758801057_book-419589_640.jpg"


@pytest.mark.parametrize("reference", [None, "", "   ", 0, 12])
def test_empty_reference_resolves_to_thumbnail_default(resolver, reference):
    assert resolver.resolve(reference) == THUMBNAIL_URL


@pytest.mark.parametrize(
    "reference",
    [
        "http://cdn.example.com/a.jpg",
        "https://cdn.example.com/a.jpg?w=200",
        "https://images.example.com/uploads/b.png",
    ],
)
def test_absolute_urls_pass_through(resolver, reference):
    assert resolver.resolve(reference) == reference


@pytest.mark.parametrize(
    "reference, expected",
    [
        ("photo.jpg", "http://localhost:8000/uploads/photo.jpg"),
        ("/uploads/x.jpg", "http://localhost:8000/uploads/x.jpg"),
        ("/assets/logo.png", "/assets/logo.png"),
        ("images/cover.png", "images/cover.png"),
        ("/media/cover.png", "/media/cover.png"),
    ],
)
def test_path_shapes(resolver, reference, expected):
    assert resolver.resolve(reference) == expected


def test_explicit_fallback_is_resolved(resolver):
    assert resolver.resolve("", "hero.jpg") == "http://localhost:8000/uploads/hero.jpg"
    assert resolver.resolve(None, "/assets/fallback.png") == "/assets/fallback.png"


def test_empty_fallback_uses_thumbnail_default(resolver):
    assert resolver.resolve("", "") == THUMBNAIL_URL


def test_everything_empty_returns_last_resort():
    resolver = UrlResolver(ResolverConfig(defaults=DefaultImages(thumbnail="")))
    assert resolver.resolve(None, None) == LAST_RESORT_IMAGE


def test_base_origin_trailing_slash_is_normalised():
    resolver = UrlResolver(ResolverConfig(base_origin="https://api.example.com/"))
    assert resolver.resolve("a.jpg") == "https://api.example.com/uploads/a.jpg"


def test_custom_upload_root():
    resolver = UrlResolver(
        ResolverConfig(base_origin="http://api", upload_root="media/")
    )
    assert resolver.resolve("a.jpg") == "http://api/media/a.jpg"
    assert resolver.resolve("/media/a.jpg") == "http://api/media/a.jpg"
    assert resolver.resolve("/uploads/a.jpg") == "/uploads/a.jpg"


@pytest.mark.parametrize(
    "base_origin", ["http://localhost:8000", "", "api.example.com"]
)
@pytest.mark.parametrize(
    "reference",
    [
        None,
        "",
        "photo.jpg",
        "/uploads/x.jpg",
        "/assets/logo.png",
        "https://cdn.example.com/a.jpg",
        "nested/path.jpg",
        "//cdn.example.com/a.jpg",
    ],
)
def test_resolve_is_idempotent(base_origin, reference):
    resolver = UrlResolver(ResolverConfig(base_origin=base_origin))
    once = resolver.resolve(reference)
    assert resolver.resolve(once) == once


def test_optimized_url_ignores_options(resolver):
    assert resolver.optimized_url("photo.jpg", {"width": 100}) == resolver.resolve(
        "photo.jpg"
    )
    assert resolver.optimized_url(
        "/assets/a.png", ImageOptions(width=10, height=20, quality=50)
    ) == "/assets/a.png"
    assert resolver.optimized_url(None) == THUMBNAIL_URL


@pytest.mark.parametrize("options", [100, "w=100", ["width", 100], object()])
def test_optimized_url_accepts_any_option_bag(resolver, options):
    assert resolver.optimized_url("a.jpg", options) == resolver.resolve("a.jpg")


def test_image_options_from_mapping():
    assert ImageOptions.coerce({"width": 100}) == ImageOptions(width=100)
    assert ImageOptions.coerce(100) == ImageOptions()
