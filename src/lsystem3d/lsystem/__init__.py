from lsystem3d.lsystem.presets import get_preset as get_preset  # noqa: F401
from lsystem3d.lsystem.presets import preset_names as preset_names  # noqa: F401
from lsystem3d.lsystem.rewriter import Rewriter as Rewriter  # noqa: F401
from lsystem3d.lsystem.rewriter import expand as expand  # noqa: F401
from lsystem3d.lsystem.rewriter import rewrite_pass as rewrite_pass  # noqa: F401
from lsystem3d.lsystem.rule import LSystemRule as LSystemRule  # noqa: F401
