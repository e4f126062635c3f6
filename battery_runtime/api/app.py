from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse

from ..analytics.export import export_filename, results_to_csv
from ..config import configure_logging
from ..models.presets import PRESETS
from .schema import UserConfig, preset_config, run_runtime_estimate

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Battery Runtime Estimator API")


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@app.get("/presets")
async def list_presets() -> dict:
    return {"presets": sorted(PRESETS)}


@app.get("/presets/{name}")
async def get_preset(name: str) -> dict:
    if name not in PRESETS:
        raise HTTPException(status_code=404, detail=f"Unknown preset {name!r}")
    return preset_config(name)


@app.post("/calculate")
async def calculate_runtime(user_config: UserConfig) -> dict:
    """Run the engine; validation problems come back in ``errors`` with status 200."""
    result = run_runtime_estimate(user_config)
    if not result.ok:
        logger.info("Calculation returned %d error(s)", len(result.errors))
    else:
        logger.info(
            "Calculated %d phase(s): %.4g mAh/day, %.1f days",
            len(user_config.phases),
            result.total_mAh_per_day,
            result.runtime_days,
        )
    return result.to_dict()


@app.post("/export/csv", response_class=PlainTextResponse)
async def export_csv(user_config: UserConfig) -> PlainTextResponse:
    result = run_runtime_estimate(user_config)
    if not result.ok:
        raise HTTPException(status_code=422, detail=result.errors)
    return PlainTextResponse(
        results_to_csv(result),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export_filename("results")}"'},
    )
