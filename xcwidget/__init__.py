from xcwidget.config import WidgetSettings
from xcwidget.xcode import sync_widget_target
from xcwidget.xcode.graph import ProjectGraph
from xcwidget.xcode.synthesizer import SyncResult, apply_widget_changes
from xcwidget.xcode.formatter import format_project
