"""Built-in rule values, one per figure offered in the viewer menu."""

from __future__ import annotations

from typing import Any

from lsystem3d.lsystem.rule import LSystemRule

PRESETS: dict[str, dict[str, Any]] = {
    "koch": {
        "name": "Quadratic Koch Curve",
        "axiom": "F",
        "angle": 90.0,
        "iterations": 3,
        "rules": {"F": "F+F-F-F+F"},
        "step_length": 0.2,
        "start_direction": [1.0, 0.0, 0.0],
        "colors": {"depth_based": False, "palette": [[1.0, 1.0, 1.0]]},
        "description": "Classic planar Koch curve drawn with right-angle turns.",
    },
    "sierpinski": {
        "name": "Sierpinski Triangle",
        "axiom": "F-G-G",
        "angle": 120.0,
        "iterations": 5,
        "rules": {"F": "F-G+F+G-F", "G": "GG"},
        "step_length": 0.3,
        "start_position": [-5.0, -4.0, 0.0],
        "start_direction": [1.0, 0.0, 0.0],
        "colors": {"depth_based": False},
        "description": "Sierpinski arrowhead using two drawing symbols.",
    },
    "plant": {
        "name": "3D Plant",
        "axiom": "F",
        "angle": 25.0,
        "iterations": 4,
        "rules": {"F": "F/[+F]F&[-F]F"},
        "step_length": 0.35,
        "start_position": [0.0, -8.0, 0.0],
        "description": "Basic 3D plant with balanced branching.",
    },
    "bush": {
        "name": "Bush",
        "axiom": "F",
        "angle": 22.5,
        "iterations": 4,
        "rules": {"F": "FF-[-F+F+F]+[+F-F-F]"},
        "step_length": 0.25,
        "start_position": [0.0, -8.0, 0.0],
        "description": "Dense bush; each segment sprouts two opposed tufts.",
    },
    "oak_tree": {
        "name": "Oak Tree",
        "axiom": "''A",
        "angle": 30.0,
        "iterations": 6,
        "rules": {
            "A": "F[&!B]/////[&!B]///////[&!B]",
            "B": "F[+!B][-!B]&FB",
            "F": "F",
        },
        "step_length": 1.0,
        "start_position": [0.0, -8.0, 0.0],
        "description": "Broad crown from three whorled primary limbs.",
    },
    "pine_tree": {
        "name": "Pine Tree",
        "axiom": "'''FA",
        "angle": 20.0,
        "iterations": 7,
        "rules": {"A": "F[&&!B]//[&&!B]//[&&!B]//[&&!B]FA", "B": "F[-!F][+!F]"},
        "step_length": 0.8,
        "start_position": [0.0, -9.0, 0.0],
        "description": "Conical conifer: a leader with whorls of drooping branches.",
    },
    "cherry_blossom": {
        "name": "Cherry Blossom",
        "axiom": "'FX",
        "angle": 28.0,
        "iterations": 5,
        "rules": {"X": "F[&!#X]//[&!#X]///[^!X]", "F": "FF"},
        "step_length": 0.35,
        "start_position": [0.0, -8.0, 0.0],
        "colors": {
            "depth_based": False,
            "palette": [
                [0.45, 0.25, 0.15],
                [0.55, 0.35, 0.25],
                [1.0, 0.7, 0.8],
                [1.0, 0.85, 0.9],
            ],
        },
        "description": "Spreading crown whose outer twigs shade into blossom pink.",
    },
    "autumn_maple": {
        "name": "Autumn Maple",
        "axiom": "FFX",
        "angle": 35.0,
        "iterations": 5,
        "rules": {"X": "F[+#X][-#X]/[&#X]F#X"},
        "step_length": 0.5,
        "start_position": [0.0, -8.0, 0.0],
        "colors": {
            "depth_based": False,
            "palette": [
                [0.4, 0.25, 0.1],
                [0.8, 0.4, 0.0],
                [0.9, 0.2, 0.0],
                [1.0, 0.75, 0.0],
            ],
        },
        "description": "Maple in fall colors; each fork advances the palette.",
    },
    "willow_tree": {
        "name": "Weeping Willow",
        "axiom": "''FFFA",
        "angle": 18.0,
        "iterations": 5,
        "rules": {"A": "[&&&!B]/////[&&&!B]/////[&&&!B]", "B": "F&F&[!C]F&B", "C": "!F&F&F"},
        "step_length": 0.7,
        "start_position": [0.0, -8.0, 0.0],
        "description": "Branches arc over and hang down in long strands.",
    },
    "baobab_tree": {
        "name": "Baobab Tree",
        "axiom": "'''''FFFFA",
        "angle": 40.0,
        "iterations": 4,
        "rules": {"A": "[!&B]///[!&B]///[!&B]", "B": "F[+!B][-!B]"},
        "step_length": 0.8,
        "start_position": [0.0, -8.0, 0.0],
        "description": "Thick short trunk topped by a flat, stubby crown.",
    },
    "spiral_eucalyptus": {
        "name": "Spiral Eucalyptus",
        "axiom": "'A",
        "angle": 22.0,
        "iterations": 10,
        "rules": {"A": "F/[&!B]\\\\\\A", "B": "F[+F][-F]"},
        "step_length": 0.9,
        "start_position": [0.0, -9.0, 0.0],
        "description": "Tall stem shedding branches along a helix.",
    },
}


def preset_names() -> list[str]:
    return sorted(PRESETS)


def get_preset(name: str) -> LSystemRule:
    """Return the validated built-in rule called ``name``.

    Raises :class:`KeyError` for unknown names.
    """

    return LSystemRule.from_mapping(PRESETS[name])
