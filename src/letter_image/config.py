"""
Runtime settings.

Defaults mirror the constants of the original page: a 100 x 77 grid, a
1200 ms fade and colour sampling straight from the alpha channel. Settings can
come from a YAML file and from CLI overrides; CLI values win.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

PROSE = (
    "Echo park cray pabst single-origin coffee tattooed. Polaroid yuccie etsy shoreditch, disrupt "
    "butcher authentic art party helvetica. Authentic kale chips keytar glossier shoreditcLetters.helpers. "
    "Chia lumbersexual mustache everyday carry mlkshk. Tacos farm-to-table craft beer, literally "
    "fingerstache 3 wolf moon poutine cardigan adaptogen roof party YOLO cornhole pork belly. Leggings "
    "adaptogen raclette fam bicycle rights bushwick stumptown venmo locavore woke. Authentic swag "
    "live-edge knausgaard, prism messenger bag waistcoat pop-up jean shorts bitters viral actually "
    "coloring book wayfarers. Sartorial mixtape iPhone before they sold out plaid hoodie. Portland pabst "
    "before they sold out woke banjo sartorial 3 wolf moon. Roof party enamel pin subway tile venmo, "
    "vexillologist cold-pressed occupy selfies seitan cliche offal mlkshk intelligentsia tumblr "
    "wayfarers. Glossier organic vexillologist lomo fixie."
)

LOADING_MESSAGE = "Preparing image"
FILE_LOADING_MESSAGE = "Loading file"
ERROR_MESSAGE = "There was a problem loading that image"

AlphaSource = Literal["alpha", "darkness"]
AlphaMode = Literal["raw", "normalized", "inverted"]


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    columns: int = Field(default=100, gt=0)
    rows: int = Field(default=77, gt=0)
    fade_time: float = Field(default=1.2, ge=0)
    prose: str = Field(default=PROSE, min_length=1)

    monochrome: bool = False
    alpha_source: AlphaSource = "alpha"
    alpha_mode: AlphaMode = "raw"

    surface_width: int = Field(default=800, gt=0)
    surface_height: int = Field(default=600, gt=0)

    base: str = "."
    image_template: str = "images/image-{n}.jpg"
    http_timeout: float = Field(default=30.0, gt=0)

    cancel_stale_runs: bool = True

    @field_validator("image_template")
    @classmethod
    def _template_has_slot(cls, value: str) -> str:
        if "{n}" not in value:
            raise ValueError("image_template must contain '{n}'")
        try:
            value.format(n=1)
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(f"image_template may only use '{{n}}': {e!r}") from e
        return value


def load_settings(path: Optional[Union[str, Path]] = None, **overrides: Any) -> Settings:
    data: dict[str, Any] = {}
    if path:
        text = Path(path).read_text(encoding="utf-8")
        obj = yaml.safe_load(text)
        if obj is None:
            obj = {}
        if not isinstance(obj, dict):
            raise ValueError(f"{path}: settings must be a YAML mapping.")
        data.update(obj)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings.model_validate(data)
