# humosync/ui/components/__init__.py

from .bars import BarsComponent
from .camera import CameraComponent
from .header import HeaderComponent
from .logs import LogComponent
from .prediction import PredictionComponent
