from humor_admin.config.settings import ADMIN_PATH, LOGIN_PATH, Settings, get_settings

__all__ = ["ADMIN_PATH", "LOGIN_PATH", "Settings", "get_settings"]
