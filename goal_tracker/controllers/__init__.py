from .admin import admin_bp
from .analytics import analytics_bp
from .auth import auth_bp
from .goal import goal_bp
from .user import user_bp
