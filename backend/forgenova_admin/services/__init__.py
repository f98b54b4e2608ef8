"""Per-entity admin managers."""

from forgenova_admin.services.activity_log import ActivityLogger
from forgenova_admin.services.admin_roles import AdminRoleManager
from forgenova_admin.services.api_keys import APIKeyManager
from forgenova_admin.services.backups import BackupManager
from forgenova_admin.services.email_settings import EmailSettingsManager
from forgenova_admin.services.feature_flags import FeatureFlagManager
from forgenova_admin.services.system_settings import SystemSettingsManager
from forgenova_admin.services.templates import TemplateManager
from forgenova_admin.services.users import UserManager
from forgenova_admin.services.workspaces import WorkspaceManager

__all__ = [
    "ActivityLogger",
    "AdminRoleManager",
    "APIKeyManager",
    "BackupManager",
    "EmailSettingsManager",
    "FeatureFlagManager",
    "SystemSettingsManager",
    "TemplateManager",
    "UserManager",
    "WorkspaceManager",
]
