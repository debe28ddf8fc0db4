from lsystem3d.utilities.env.diagnostics import DiagnosticsConfiguration
from lsystem3d.utilities.env.lsystem import LSystemConfiguration
from lsystem3d.utilities.env.rendering import RenderingConfiguration
from lsystem3d.utilities.env.viewer import ViewerConfiguration


class Configuration(
    DiagnosticsConfiguration,
    LSystemConfiguration,
    RenderingConfiguration,
    ViewerConfiguration,
):
    """Aggregate environment configuration helpers."""
