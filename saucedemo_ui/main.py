# main.py
import logging
import os
import sys
from saucedemo_ui.services.scenarios import build_catalog
from saucedemo_ui.services.suite_service import SuiteService, selected_tags
from saucedemo_ui.config.settings import Config

# --- FastAPI imports ---
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from saucedemo_ui.routes.api import router as api_router
import uvicorn


def setup_logging():
    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )


def create_app() -> FastAPI:
    app = FastAPI(title="SauceDemo UI Suite")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router)
    return app


def run_cli(tags=None) -> int:
    try:
        service = SuiteService(Config.load())
        result = service.run(build_catalog(), tags)
    except KeyboardInterrupt:
        logging.warning('Suite interrupted by user.')
        return 130
    except Exception as e:
        logging.error(f'Suite failed with error: {e}')
        return 1
    return 0 if result.success else 1


def run_api():
    uvicorn.run(create_app(), host="0.0.0.0", port=int(os.getenv("PORT", 8000)))


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    setup_logging()
    mode = os.getenv('MODE', 'cli').lower()
    if argv and argv[0] in ('cli', 'api'):
        mode = argv[0]
        argv = argv[1:]
    if mode == 'api':
        run_api()
        return 0
    return run_cli(selected_tags(argv[0] if argv else os.getenv('TAGS')))


if __name__ == '__main__':
    sys.exit(main())

# Usage:
#   python -m saucedemo_ui.main                 # run the whole suite
#   python -m saucedemo_ui.main cli login,cart  # run scenarios tagged login or cart
#   python -m saucedemo_ui.main api             # API server mode
#   MODE=api python -m saucedemo_ui.main        # API server mode via env
