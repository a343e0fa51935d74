import sys

from mindnode import MindMap, SvgSurface

TREE = {
    "name": "Kidney disease",
    "children": [
        {"name": "Diet", "children": [{"name": "Low salt"}, {"name": "Low protein"}]},
        {"name": "Symptoms", "children": [{"name": "Swelling"}, {"name": "Fatigue"}]},
        {"name": "Regular follow-up and lab tests"},
    ],
}


def main() -> None:
    target = sys.argv[1] if len(sys.argv) > 1 else "mind_map.svg"
    mind_map = MindMap(TREE, surface=SvgSurface(), wrap_mode="words", max_chars_per_line=14)
    mind_map.zoom(1.1)
    mind_map.settle()
    mind_map.surface.save(target)
    print(f"wrote {len(mind_map)} nodes to {target}")


if __name__ == "__main__":
    main()
