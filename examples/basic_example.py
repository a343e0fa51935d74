from rich import print

from mindnode import AsciiSurface, MindMap

TREE = {
    "name": "慢性腎臟病",
    "children": [
        {
            "name": "飲食控制",
            "children": [{"name": "低鹽"}, {"name": "低蛋白"}, {"name": "控制水分攝取量"}],
        },
        {"name": "常見症狀", "children": [{"name": "水腫"}, {"name": "疲倦"}]},
        {"name": "長期追蹤與定期檢驗"},
    ],
}


def main() -> None:
    mind_map = MindMap(TREE, surface=AsciiSurface())
    print(mind_map.render(include_markup=True))

    diet = mind_map.find("飲食控制")
    mind_map.collapse(diet.identity)
    print(mind_map.render(include_markup=True))


if __name__ == "__main__":
    main()
