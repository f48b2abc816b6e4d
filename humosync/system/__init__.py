# humosync/system/__init__.py

from .dashboard import DashboardSystem
from .lifecycle import SystemLifecycle
from .state import SystemState
