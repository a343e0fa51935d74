import os
import sys

from rich import print

from mindnode import AsciiSurface, MindMap, generate_tree
from mindnode.agent import TreeGenerationError


def _offline_client(messages, **kwargs):
    content = '{"name": "Tea", "children": [{"name": "Green"}, {"name": "Black"}, {"name": "Oolong"}]}'
    return {"choices": [{"message": {"content": f"```json\n{content}\n```"}}]}


def main() -> None:
    topic = " ".join(sys.argv[1:]) or "Tea"
    kwargs = {}
    if not os.getenv("MINDNODE_API_KEY"):
        kwargs["client"] = _offline_client

    try:
        tree = generate_tree(topic, **kwargs)
    except TreeGenerationError as exc:
        print(f"[red]Could not generate a mind map:[/] {exc}")
        raise SystemExit(1) from exc

    mind_map = MindMap(tree, surface=AsciiSurface())
    print(mind_map.render(include_markup=True))


if __name__ == "__main__":
    main()
