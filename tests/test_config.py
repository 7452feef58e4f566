import pytest
from pydantic import ValidationError

from letter_image.config import PROSE, Settings, load_settings


def test_defaults_match_the_original_page():
    s = Settings()
    assert (s.columns, s.rows) == (100, 77)
    assert s.fade_time == 1.2
    assert s.prose == PROSE
    assert (s.monochrome, s.alpha_source, s.alpha_mode) == (False, "alpha", "raw")
    assert s.image_template == "images/image-{n}.jpg"
    assert s.cancel_stale_runs is True


def test_yaml_file_and_overrides(tmp_path):
    path = tmp_path / "letters.yaml"
    path.write_text("base: /srv/site\nalpha_mode: normalized\nfade_time: 0.3\n", encoding="utf-8")

    s = load_settings(path, fade_time=None, monochrome=True)

    assert s.base == "/srv/site"
    assert s.alpha_mode == "normalized"
    assert s.fade_time == 0.3
    assert s.monochrome is True


def test_empty_yaml_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path) == Settings()


def test_yaml_must_be_a_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(path)


@pytest.mark.parametrize(
    "overrides",
    [
        {"alpha_mode": "both"},
        {"alpha_source": "brightness"},
        {"image_template": "images/fixed.jpg"},
        {"columns": 0},
        {"prose": ""},
        {"image_template": "images/{n}-{size}.jpg"},
        {"image_template": "images/{n}-{0}.jpg"},
        {"colour": True},
    ],
)
def test_bad_settings_are_rejected(overrides):
    with pytest.raises(ValidationError):
        load_settings(None, **overrides)
