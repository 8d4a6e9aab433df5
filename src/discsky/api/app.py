"""FastAPI app exposing projection, illumination, phase and eclipse endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from discsky.config import DiscSkyConfig, config_from_env
from discsky.contracts import GeoCoordinate, OutOfDiscError, PlanarPoint
from discsky.engine import DiscSky
from discsky.geo.grid import build_coordinate_grid, place_cities

logger = logging.getLogger(__name__)

_MAX_POINTS = 10_000


class PointRequest(BaseModel):
    """Planar disc point."""

    model_config = ConfigDict(allow_inf_nan=False)

    x: float
    z: float

    def to_contract(self) -> PlanarPoint:
        """Convert API model into PlanarPoint contract."""
        return PlanarPoint.from_xz(self.x, self.z)


class GeoRequest(BaseModel):
    """Geographic coordinate in degrees."""

    model_config = ConfigDict(allow_inf_nan=False)

    lat: float = Field(ge=-90.0, le=90.0)
    lon: float = Field(ge=-180.0, le=180.0)

    def to_contract(self) -> GeoCoordinate:
        """Convert API model into GeoCoordinate contract."""
        return GeoCoordinate(latitude_deg=self.lat, longitude_deg=self.lon)


class SkyStateRequest(BaseModel):
    """Sun/moon positions and seasonal declination of one tick."""

    model_config = ConfigDict(allow_inf_nan=False)

    sun: PointRequest
    moon: PointRequest
    declination_deg: float = Field(default=0.0, ge=-90.0, le=90.0)
    eclipse_report: GeoRequest | None = None


class IlluminationRequest(SkyStateRequest):
    """Sky state plus the points to sample."""

    points: list[PointRequest] = Field(min_length=1, max_length=_MAX_POINTS)


class PlanarPointResponse(BaseModel):
    """Projected point."""

    x: float
    z: float
    radial_distance: float


class GeoResponse(BaseModel):
    """Geographic coordinate under a disc point."""

    lat: float
    lon: float


class IlluminationResponse(BaseModel):
    """Illumination samples in request order."""

    samples: list[dict[str, Any]]


class MoonPhaseResponse(BaseModel):
    """Normalized and signed moon phase."""

    phase: float
    signed_phase: float


class EclipseResponse(BaseModel):
    """Eclipse state payload."""

    is_occurring: bool
    attenuation: float
    marker_point: PlanarPointResponse


def _sky_for(config: DiscSkyConfig, payload: SkyStateRequest) -> DiscSky:
    """Build an engine updated with the request's sky state."""
    sky = DiscSky(config)
    try:
        sky.update(
            payload.sun.to_contract(),
            payload.moon.to_contract(),
            payload.declination_deg,
            payload.eclipse_report.to_contract() if payload.eclipse_report else None,
        )
    except OutOfDiscError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return sky


def create_app(config: DiscSkyConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI app."""
    app = FastAPI(title="Disc Sky API", version="0.1.0")
    cfg = config or config_from_env()
    app.state.config = cfg
    logger.info("disc sky api configured with radius=%.1f", cfg.disc.radius)

    @app.exception_handler(RequestValidationError)
    async def on_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Report validation errors without echoing rejected values, which may be NaN."""
        errors = [{"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]} for err in exc.errors()]
        return JSONResponse(status_code=422, content={"detail": errors})

    @app.post("/project", response_model=PlanarPointResponse)
    def post_project(payload: GeoRequest) -> PlanarPointResponse:
        """Project a geographic coordinate onto the disc."""
        try:
            point = DiscSky(cfg).project_geo_to_plane(payload.to_contract())
        except OutOfDiscError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return PlanarPointResponse(**point.to_dict())

    @app.post("/unproject", response_model=GeoResponse)
    def post_unproject(payload: PointRequest) -> GeoResponse:
        """Report the geographic coordinate under a disc point."""
        try:
            coord = DiscSky(cfg).project_plane_to_geo(payload.to_contract())
        except OutOfDiscError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return GeoResponse(lat=coord.latitude_deg, lon=coord.longitude_deg)

    @app.post("/illumination", response_model=IlluminationResponse)
    def post_illumination(payload: IlluminationRequest) -> IlluminationResponse:
        """Sample illumination at each requested point."""
        sky = _sky_for(cfg, payload)
        samples = [sky.sample_illumination(p.to_contract()).to_dict() for p in payload.points]
        return IlluminationResponse(samples=samples)

    @app.post("/moon-phase", response_model=MoonPhaseResponse)
    def post_moon_phase(payload: SkyStateRequest) -> MoonPhaseResponse:
        """Return the moon phase for the given positions."""
        phase = _sky_for(cfg, payload).sample_moon_phase()
        return MoonPhaseResponse(phase=phase, signed_phase=2.0 * phase - 1.0)

    @app.post("/eclipse", response_model=EclipseResponse)
    def post_eclipse(payload: SkyStateRequest) -> EclipseResponse:
        """Return the eclipse state for the given positions."""
        state = _sky_for(cfg, payload).sample_eclipse()
        return EclipseResponse(
            is_occurring=state.is_occurring,
            attenuation=state.attenuation,
            marker_point=PlanarPointResponse(**state.marker_point.to_dict()),
        )

    @app.get("/grid")
    def get_grid(
        lat_step: float = Query(default=10.0, ge=1.0, le=90.0),
        lon_step: float = Query(default=30.0, ge=1.0, le=180.0),
    ) -> dict[str, Any]:
        """Return parallels, meridians, labels and city markers."""
        grid = build_coordinate_grid(cfg.disc, lat_step=lat_step, lon_step=lon_step)
        cities = place_cities(cfg.disc)

        def _line(line: Any) -> dict[str, Any]:
            """Serialize one grid line."""
            return {
                "kind": line.kind,
                "value_deg": line.value_deg,
                "points": [[p.x, p.z] for p in line.points],
            }

        return {
            "parallels": [_line(line) for line in grid.parallels],
            "meridians": [_line(line) for line in grid.meridians],
            "labels": [{"text": label.text, "x": label.position.x, "z": label.position.z} for label in grid.labels],
            "cities": [
                {
                    "name": city.name,
                    "label": city.label,
                    "in_model": city.in_model,
                    "position": city.position.to_dict() if city.position else None,
                }
                for city in cities
            ],
        }

    return app


app = create_app()
