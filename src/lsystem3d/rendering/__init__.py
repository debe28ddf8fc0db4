from lsystem3d.rendering.camera import OrbitCamera as OrbitCamera  # noqa: F401
from lsystem3d.rendering.geometry import Bounds as Bounds  # noqa: F401
from lsystem3d.rendering.geometry import LineSegment as LineSegment  # noqa: F401
from lsystem3d.rendering.geometry import Vertex as Vertex  # noqa: F401
from lsystem3d.rendering.renderer import \
    BACKGROUND_COLOR as BACKGROUND_COLOR  # noqa: F401
from lsystem3d.rendering.renderer import LineRenderer as LineRenderer  # noqa: F401
from lsystem3d.rendering.renderer import RenderStats as RenderStats  # noqa: F401
