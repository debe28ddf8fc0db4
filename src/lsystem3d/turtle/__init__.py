from lsystem3d.turtle.commands import TurtleCommand as TurtleCommand  # noqa: F401
from lsystem3d.turtle.state import DEFAULT_PALETTE as DEFAULT_PALETTE  # noqa: F401
from lsystem3d.turtle.state import TurtleState as TurtleState  # noqa: F401
from lsystem3d.turtle.state import depth_color as depth_color  # noqa: F401
from lsystem3d.turtle.turtle import Turtle3D as Turtle3D  # noqa: F401
