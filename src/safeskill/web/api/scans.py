"""REST API for package scans."""

from __future__ import annotations

import logging
from dataclasses import replace

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from safeskill.fetch import (
    DownloadError,
    ExtractError,
    download_package,
    sanitize_package_name,
    work_area,
)
from safeskill.scanner.engine import scan_skill
from safeskill.scanner.models import SkillScanResult
from safeskill.storage.repos import ScanRepo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["scans"])


class ScanRequest(BaseModel):
    target: str | None = None


def _download_and_scan(package_spec: str, timeout: float) -> SkillScanResult:
    with work_area(prefix="safeskill-web-") as work_dir:
        package_dir = download_package(package_spec, work_dir, timeout=timeout)
        return scan_skill(package_dir)


@router.post("/scan")
async def scan_package(body: ScanRequest, request: Request):
    target = (body.target or "").strip()
    if not target:
        return JSONResponse(
            status_code=400,
            content={"error": "Please provide a package name or GitHub URL."},
        )

    package_spec = sanitize_package_name(target)
    if not package_spec:
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid input. Please provide an npm package name "
                "(e.g. @modelcontextprotocol/server-filesystem) or a GitHub URL."
            },
        )

    config = request.app.state.config
    try:
        result = await run_in_threadpool(
            _download_and_scan, package_spec, config.download_timeout
        )
    except DownloadError as e:
        logger.info("Download failed for %s: %s", target, e)
        return JSONResponse(
            status_code=404,
            content={
                "error": f'Could not download "{target}". Make sure the package '
                "name is correct."
            },
        )
    except ExtractError as e:
        return JSONResponse(status_code=500, content={"error": str(e)})

    result = replace(result, skill_name=target)
    scan_id = await ScanRepo(request.app.state.db).save_result(result, target=target)

    payload = result.to_dict()
    return {
        "id": scan_id,
        "skillName": payload["skillName"],
        "score": payload["score"],
        "rating": payload["rating"],
        "findings": payload["findings"],
        "scannedFiles": payload["scannedFiles"],
        "scanDuration": payload["scanDuration"],
    }


@router.get("/scans")
async def list_scans(request: Request, limit: int = 50, offset: int = 0):
    repo = ScanRepo(request.app.state.db)
    return await repo.list_all(limit=limit, offset=offset)


@router.get("/scans/{scan_id}")
async def get_scan(scan_id: str, request: Request):
    repo = ScanRepo(request.app.state.db)
    result = await repo.get(scan_id)
    if not result:
        return JSONResponse(
            status_code=404,
            content={"detail": "Scan not found"},
        )
    return result
