from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from cloudup.core.constants import DEFAULT_DELIVERY_BASE_URL
from cloudup.core.security import render_value

TRANSFORMATION_CODES = {
    "angle": "a",
    "aspect_ratio": "ar",
    "background": "b",
    "border": "bo",
    "color": "co",
    "crop": "c",
    "default_image": "d",
    "dpr": "dpr",
    "effect": "e",
    "fetch_format": "f",
    "gravity": "g",
    "height": "h",
    "opacity": "o",
    "overlay": "l",
    "quality": "q",
    "radius": "r",
    "underlay": "u",
    "width": "w",
    "x": "x",
    "y": "y",
    "zoom": "z",
}


def transformation_string(transformations: Mapping[str, Any] | None) -> str:
    if not transformations:
        return ""
    parts = []
    for key, value in transformations.items():
        code = TRANSFORMATION_CODES.get(key)
        if code is None:
            raise ValueError(f"unsupported transformation: {key}")
        if value is None:
            continue
        parts.append(f"{code}_{render_value(value)}")
    return ",".join(sorted(parts))


def image_url(
    cloud_name: str,
    public_id: str,
    transformations: Mapping[str, Any] | None = None,
    version: int | str | None = None,
    format: str | None = None,
    base_url: str = DEFAULT_DELIVERY_BASE_URL,
) -> str:
    segments = [base_url.rstrip("/"), quote(cloud_name, safe=""), "image", "upload"]
    transformation = transformation_string(transformations)
    if transformation:
        segments.append(transformation)
    if version is not None:
        segments.append(f"v{version}")
    path = quote(public_id, safe="/")
    segments.append(f"{path}.{format}" if format else path)
    return "/".join(segments)
