"""Rich renderables for the swayframe CLI."""

from typing import List

from rich.table import Table
from rich.tree import Tree as RichTree

from ..models.tree import NodeType, TreeNode


TYPE_STYLES = {
    NodeType.ROOT: "bold cyan",
    NodeType.OUTPUT: "bold magenta",
    NodeType.WORKSPACE: "bold blue",
    NodeType.CON: "green",
    NodeType.FLOATING_CON: "yellow",
}


def format_node_label(node: TreeNode) -> str:
    """Format one tree node for display."""
    style = TYPE_STYLES.get(node.type, "white")
    label = f"[{style}]{node.type.value}[/{style}] [dim]#{node.id}[/dim]"
    if node.name:
        label += f" {node.name}"
    if node.window is not None:
        label += f" [cyan]window={node.window}[/cyan]"
    if node.focused:
        label += " [bold yellow]●[/bold yellow]"
    return label


def build_tree(root: TreeNode) -> RichTree:
    """Build a Rich tree mirroring the sway tree.

    Uses an explicit stack so arbitrarily deep trees render without
    recursion.
    """
    rich_tree = RichTree(format_node_label(root), guide_style="dim")
    stack = [(root, rich_tree)]
    while stack:
        node, branch = stack.pop()
        children = [(child, branch.add(format_node_label(child))) for child in node.nodes]
        stack.extend(reversed(children))
    return rich_tree


def build_windows_table(windows: List[TreeNode]) -> Table:
    """Build a table of content containers."""
    table = Table(title="Sway Windows", show_header=True, header_style="bold cyan")
    table.add_column("Con ID", justify="right", style="dim")
    table.add_column("Window", justify="right")
    table.add_column("App ID")
    table.add_column("Title")
    table.add_column("Visible", justify="center")
    table.add_column("Focused", justify="center")

    for node in windows:
        table.add_row(
            str(node.id),
            str(node.window) if node.window is not None else "-",
            node.app_id or "-",
            node.name or "",
            "✓" if node.visible else "",
            "✓" if node.focused else "",
        )

    return table
