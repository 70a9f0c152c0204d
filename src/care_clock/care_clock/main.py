from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .analytics.controller import register as register_analytics
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_default_facility, ensure_manager
from .employees.controller import register as register_employees
from .facilities.controller import register as register_facilities
from .signups.controller import register as register_signups
from .timeclock.controller import register as register_timeclock

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("mysql.connector").setLevel(logging.WARNING)


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            ensure_default_facility(
                db_config,
                name=settings.DEFAULT_FACILITY_NAME,
                latitude=settings.DEFAULT_FACILITY_LATITUDE,
                longitude=settings.DEFAULT_FACILITY_LONGITUDE,
                radius_meters=settings.DEFAULT_PERIMETER_RADIUS_METERS,
            )
            manager_email = getattr(settings, "BOOTSTRAP_MANAGER_EMAIL", None)
            if manager_email:
                ensure_manager(
                    db_config,
                    email=manager_email,
                    name=getattr(settings, "BOOTSTRAP_MANAGER_NAME", "Facility Manager"),
                    password=settings.BOOTSTRAP_MANAGER_PASSWORD,
                )

        container = build_container(db_config=db_config, settings=settings)

    app.extensions["care_clock"] = container

    register_employees(app, container)
    register_facilities(app, container)
    register_timeclock(app, container)
    register_signups(app, container)
    register_analytics(app, container)

    return app
