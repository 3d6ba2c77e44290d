"""Tree of the files written to a bundle.

The manifest mirrors the record headers of a bundle as a directory tree, which the
CLI can print so the user sees at a glance what was gathered.
"""

from typing import Any, Iterator, Optional

from anytree import Node


class ManifestNode(Node):  # type: ignore
    """Node representing a file or directory in the manifest tree.

    Extends anytree.Node with a flag telling directories from files.

    Attributes:
        name (str): The base name of the file or directory.
        is_dir (bool): True if this node represents a directory.

    Example:
        >>> root = ManifestNode("project", is_dir=True)
        >>> child = ManifestNode("main.py", parent=root)
        >>> child.parent.name
        'project'
        >>> child.is_dir
        False
    """

    def __init__(self, name: str, parent: Optional["ManifestNode"] = None, is_dir: bool = False, **kwargs: Any):
        super().__init__(name, parent, **kwargs)
        self.is_dir = is_dir


class Manifest:
    """Directory tree built from forward-slash relative paths.

    Example:
        >>> manifest = Manifest("project")
        >>> manifest.add("src/main.py")
        >>> manifest.add("README.md")
        >>> print(manifest.get_tree_representation())
        project/
        ├── src/
        │   └── main.py
        └── README.md
        >>> len(manifest)
        2
    """

    def __init__(self, root_name: str = ".") -> None:
        self.root = ManifestNode(root_name, is_dir=True)
        self._file_count = 0

    def __len__(self) -> int:
        return self._file_count

    def add(self, relative_path: str) -> None:
        """Record a file, creating its parent directory nodes as needed."""
        parts = [part for part in relative_path.split("/") if part]
        if not parts:
            return

        node = self.root
        for part in parts[:-1]:
            child = next((c for c in node.children if c.is_dir and c.name == part), None)
            if child is None:
                child = ManifestNode(part, parent=node, is_dir=True)
            node = child

        ManifestNode(parts[-1], parent=node)
        self._file_count += 1

    def stream_tree_representation(self) -> Iterator[str]:
        """Generate the tree one line at a time, in the style of the Unix ``tree`` command.

        Directories are listed before files, both alphabetically.
        """

        def write_node(node: ManifestNode, prefix: str = "", is_last: bool = True, is_root: bool = False) -> Iterator[str]:
            if is_root:
                yield f"{node.name}/"
            else:
                connector = "└── " if is_last else "├── "
                suffix = "/" if node.is_dir else ""
                yield f"{prefix}{connector}{node.name}{suffix}"

            sorted_children = sorted(node.children, key=lambda n: (not n.is_dir, n.name.lower()))
            for i, child in enumerate(sorted_children):
                is_last_child = i == len(sorted_children) - 1
                if is_root:
                    new_prefix = ""
                else:
                    new_prefix = prefix + ("    " if is_last else "│   ")
                yield from write_node(child, new_prefix, is_last_child)

        yield from write_node(self.root, is_root=True)

    def get_tree_representation(self) -> str:
        """Get the complete tree as a string."""
        return "\n".join(self.stream_tree_representation())
