from rich import print

from mindnode import AsciiSurface, MindMap


def main() -> None:
    mind_map = MindMap(
        {"name": "腎臟病", "children": [{"name": "飲食"}, {"name": "症狀"}]},
        surface=AsciiSurface(),
    )
    print(mind_map.render(include_markup=True))


if __name__ == "__main__":
    main()
