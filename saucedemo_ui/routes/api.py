# routes/api.py
from fastapi import APIRouter, Depends, HTTPException, Query
from saucedemo_ui.services.scenarios import build_catalog
from saucedemo_ui.services.suite_service import SuiteService, selected_tags
from saucedemo_ui.config.settings import Config
from typing import Optional

router = APIRouter()

# Last suite result of this process
last_results = None


def get_suite_service():
    return SuiteService(Config.load())


@router.post('/run-test')
def run_test(
    tags: Optional[str] = Query(None, description="Comma separated scenario tags, e.g. 'login,cart'"),
    service: SuiteService = Depends(get_suite_service)
):
    global last_results
    try:
        result = service.run(build_catalog(), selected_tags(tags))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    last_results = result.to_dict()
    return {"status": "success" if result.success else "failed", "summary": last_results['summary'], "report": last_results}


@router.get('/results')
def get_results():
    if last_results is None:
        raise HTTPException(status_code=404, detail="No results available. Run a test first.")
    return last_results


@router.get('/scenarios')
def list_scenarios():
    return [{"name": s.name, "description": s.description, "tags": list(s.tags)} for s in build_catalog()]


@router.get('/status')
def status():
    return {"status": "ok"}
