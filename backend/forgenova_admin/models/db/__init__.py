"""SQLAlchemy 2.0 ORM models for the admin panel schema.

Import all models here so alembic's ``env.py`` can discover them via::

    from forgenova_admin.models.db import Base  # noqa: F401
"""

from forgenova_admin.models.db.base import Base  # noqa: F401

from forgenova_admin.models.db.profile import Profile  # noqa: F401
from forgenova_admin.models.db.settings import (  # noqa: F401
    EmailSettings,
    FeatureFlag,
    SystemSetting,
)
from forgenova_admin.models.db.api_key import APIKey  # noqa: F401
from forgenova_admin.models.db.activity_log import ActivityLog  # noqa: F401
from forgenova_admin.models.db.workspace import (  # noqa: F401
    Template,
    TemplateUsage,
    Workspace,
    WorkspaceMember,
)
from forgenova_admin.models.db.backup import SystemBackup  # noqa: F401
