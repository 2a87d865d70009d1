from __future__ import annotations

from types import SimpleNamespace

from werkzeug.security import check_password_hash

from src.staff_portal.staff_portal.container import portal_credentials
from src.staff_portal.staff_portal.core.enums import PortalRole
from src.staff_portal.staff_portal.database.connection import DBConfig, DatabaseConnection


def test_portal_credentials_are_hashed_and_blank_disables_login():
    settings = SimpleNamespace(
        ADMIN_EMAIL="admin@school.local",
        ADMIN_PASSWORD="admin123",
        VICE_PRINCIPAL_EMAIL="vp@school.local",
        VICE_PRINCIPAL_PASSWORD="",
    )

    creds = portal_credentials(settings)

    assert set(creds) == {PortalRole.ADMIN}
    assert creds[PortalRole.ADMIN].password_hash != "admin123"
    assert check_password_hash(creds[PortalRole.ADMIN].password_hash, "admin123")


def test_db_config_from_settings_and_factory_rebinds():
    cfg = DBConfig.from_settings({"host": "db", "user": "portal", "database": "staff_portal"})
    assert (cfg.port, cfg.password, cfg.charset) == (3306, "", "utf8mb4")

    first = DatabaseConnection.get_instance(cfg)
    assert DatabaseConnection.get_instance(cfg) is first

    other = DatabaseConnection.get_instance(DBConfig.from_settings({"host": "db", "user": "portal", "database": "other"}))
    assert other is not first
    assert other.config.database == "other"
