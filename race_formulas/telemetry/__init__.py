# Telemetry module - Lap pace tracking
# FORBIDDEN: data.*, analysis.*

from .pace_window import RollingPaceWindow
from .lap_tracker import LapPaceTracker
