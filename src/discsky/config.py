"""Model configuration with documented defaults.

All tunable constants of the projection and lighting model live here so the
algorithms never carry magic numbers of their own.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum

from discsky.contracts import RGB


class SouthernPolicy(StrEnum):
    """How latitudes below the equator are handled by the projection."""

    REJECT = "reject"
    EXTEND = "extend"


def _validate_rgb(color: RGB, label: str) -> None:
    """Require three channels within [0, 1]."""
    if len(color) != 3 or any(not 0.0 <= channel <= 1.0 for channel in color):
        raise ValueError(f"{label} must be an RGB triple within [0, 1].")


@dataclass(frozen=True, slots=True)
class DiscConfig:
    """Disc geometry; the rim is the equator."""

    radius: float = 10_000.0
    southern_policy: SouthernPolicy = SouthernPolicy.REJECT

    def __post_init__(self) -> None:
        """Reject non-positive radius."""
        if not self.radius > 0.0:
            raise ValueError("radius must be positive.")


@dataclass(frozen=True, slots=True)
class BodyHeights:
    """Fixed heights of the sun and moon above the disc plane."""

    sun_height: float = 3_000.0
    moon_height: float = 2_500.0

    def __post_init__(self) -> None:
        """Reject non-positive heights."""
        if not self.sun_height > 0.0:
            raise ValueError("sun_height must be positive.")
        if not self.moon_height > 0.0:
            raise ValueError("moon_height must be positive.")


@dataclass(frozen=True, slots=True)
class LightingConfig:
    """Band thresholds, colors and opacity constants of the lighting model.

    Thresholds are zenith cosines and must satisfy
    `cos_night < cos_astronomical < cos_nautical < cos_civil < cos_day`.
    Darkness fractions weight each twilight band between the day alpha (0)
    and the night alpha (1).
    """

    cos_night: float = 0.05
    cos_astronomical: float = 0.12
    cos_nautical: float = 0.20
    cos_civil: float = 0.30
    cos_day: float = 0.42
    season_floor: float = -0.3

    moon_cos_low: float = 0.30
    moon_cos_high: float = 0.90
    moon_brightness: float = 0.6

    day_color: RGB = (1.0, 0.98, 0.92)
    civil_color: RGB = (1.0, 0.55, 0.25)
    nautical_color: RGB = (0.35, 0.24, 0.48)
    astronomical_color: RGB = (0.12, 0.10, 0.28)
    night_color: RGB = (0.02, 0.03, 0.10)
    moon_tint: RGB = (0.76, 0.79, 0.96)

    night_alpha: float = 0.85
    day_alpha: float = 0.02
    civil_darkness: float = 0.25
    nautical_darkness: float = 0.55
    astronomical_darkness: float = 0.80
    moon_alpha_relief: float = 0.15

    def __post_init__(self) -> None:
        """Validate threshold ordering and constant ranges."""
        thresholds = (
            self.cos_night,
            self.cos_astronomical,
            self.cos_nautical,
            self.cos_civil,
            self.cos_day,
        )
        if any(lo >= hi for lo, hi in zip(thresholds, thresholds[1:])):
            raise ValueError(
                "thresholds must be strictly increasing: "
                "cos_night < cos_astronomical < cos_nautical < cos_civil < cos_day."
            )
        if self.season_floor > 0.0:
            raise ValueError("season_floor must be <= 0.")
        if not self.moon_cos_low < self.moon_cos_high:
            raise ValueError("moon_cos_low must be < moon_cos_high.")
        for label in (
            "moon_brightness",
            "night_alpha",
            "day_alpha",
            "civil_darkness",
            "nautical_darkness",
            "astronomical_darkness",
            "moon_alpha_relief",
        ):
            value = getattr(self, label)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{label} must be within [0, 1].")
        for label in (
            "day_color",
            "civil_color",
            "nautical_color",
            "astronomical_color",
            "night_color",
            "moon_tint",
        ):
            _validate_rgb(getattr(self, label), label)


@dataclass(frozen=True, slots=True)
class EclipseConfig:
    """Planar sun-moon separations bounding the eclipse smooth threshold."""

    near_threshold: float = 150.0
    far_threshold: float = 900.0

    def __post_init__(self) -> None:
        """Require 0 <= near < far."""
        if self.near_threshold < 0.0:
            raise ValueError("near_threshold must be non-negative.")
        if not self.near_threshold < self.far_threshold:
            raise ValueError("near_threshold must be < far_threshold.")


@dataclass(frozen=True, slots=True)
class DiscSkyConfig:
    """Complete configuration surface of the model."""

    disc: DiscConfig = field(default_factory=DiscConfig)
    heights: BodyHeights = field(default_factory=BodyHeights)
    lighting: LightingConfig = field(default_factory=LightingConfig)
    eclipse: EclipseConfig = field(default_factory=EclipseConfig)


def _env_float(environ: Mapping[str, str], name: str) -> float | None:
    """Parse an optional float environment variable."""
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def config_from_env(environ: Mapping[str, str] | None = None) -> DiscSkyConfig:
    """Build configuration from `DISCSKY_*` environment overrides."""
    env = os.environ if environ is None else environ
    cfg = DiscSkyConfig()

    radius = _env_float(env, "DISCSKY_DISC_RADIUS")
    policy_raw = env.get("DISCSKY_SOUTHERN_POLICY", SouthernPolicy.REJECT.value).strip().lower()
    try:
        policy = SouthernPolicy(policy_raw)
    except ValueError as exc:
        raise ValueError("DISCSKY_SOUTHERN_POLICY must be one of: reject, extend") from exc
    cfg = replace(
        cfg,
        disc=DiscConfig(
            radius=cfg.disc.radius if radius is None else radius,
            southern_policy=policy,
        ),
    )

    sun_height = _env_float(env, "DISCSKY_SUN_HEIGHT")
    moon_height = _env_float(env, "DISCSKY_MOON_HEIGHT")
    if sun_height is not None or moon_height is not None:
        cfg = replace(
            cfg,
            heights=BodyHeights(
                sun_height=cfg.heights.sun_height if sun_height is None else sun_height,
                moon_height=cfg.heights.moon_height if moon_height is None else moon_height,
            ),
        )

    near = _env_float(env, "DISCSKY_ECLIPSE_NEAR")
    far = _env_float(env, "DISCSKY_ECLIPSE_FAR")
    if near is not None or far is not None:
        cfg = replace(
            cfg,
            eclipse=EclipseConfig(
                near_threshold=cfg.eclipse.near_threshold if near is None else near,
                far_threshold=cfg.eclipse.far_threshold if far is None else far,
            ),
        )
    return cfg
