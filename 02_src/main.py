"""Main entry point for State Inspector."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from inspector.api import create_fastapi_app
from inspector.config import load_settings
from inspector.logging_config import setup_logging
from sim import Sim


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")

    settings = load_settings()
    setup_logging(settings.log_level, settings.log_file)

    # Create SIM instance
    sim = Sim(api_url=settings.api_url)

    # Set SIM instance for control router
    from inspector.api.routes import control
    control.set_sim_instance(sim)

    # Create FastAPI app
    app = create_fastapi_app()

    # Run with uvicorn
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
