import time

from rich.live import Live
from rich.text import Text

from mindnode import AsciiSurface, MindMap

TREE = {
    "name": "Project",
    "children": [
        {"name": "Design", "children": [{"name": "Wireframes"}, {"name": "Review"}]},
        {"name": "Build", "children": [{"name": "API"}, {"name": "UI"}, {"name": "Tests"}]},
        {"name": "Ship"},
    ],
}

FRAME_INTERVAL = 1 / 30


def _frame(mind_map: MindMap) -> Text:
    return Text.from_markup(mind_map.surface.render(include_markup=True))


def _animate(mind_map: MindMap, live: Live) -> None:
    while mind_map.tick():
        live.update(_frame(mind_map))
        time.sleep(FRAME_INTERVAL)
    live.update(_frame(mind_map))
    time.sleep(0.6)


def main() -> None:
    mind_map = MindMap(TREE, surface=AsciiSurface())
    with Live(_frame(mind_map), refresh_per_second=30) as live:
        _animate(mind_map, live)
        for label in ("Build", "Design", "Build", "Project", "Project"):
            mind_map.activate(mind_map.find(label).identity)
            _animate(mind_map, live)


if __name__ == "__main__":
    main()
