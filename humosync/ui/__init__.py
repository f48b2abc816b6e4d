# humosync/ui/__init__.py

from .base import BaseUIManager
from .log_ui import LogUIManager
from .renderer import DashboardRenderer
from .state import DashboardSurface
