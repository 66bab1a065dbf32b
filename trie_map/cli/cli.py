"""
cli.py - interactive shell for poking at a TrieMap
Features:
- add/force/get/remove keys and run the prefix queries from the prompt
- load `key=value` property files into the map
- results shown with Rich tables and panels
- options persisted in a small JSON config
"""

import argparse
import logging
import shlex
from typing import Any, Callable, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from trie_map.adapters.properties import TrieBackedProperties
from trie_map.core.trie_map import TrieMap
from trie_map.utils.config_manager import Config
from trie_map.utils.logger_utils import Log, setup_logging

logger = logging.getLogger(__name__)

HELP = (
    "/load FILE  /add K [V]  /force K V  /get K  /remove K\n"
    "/complete P  /best P  /path P  /values P  /size  /dump\n"
    "/clear  /config [KEY VALUE]  /help  /quit"
)


class TrieShell:
    """Command shell over one TrieMap. `handle()` runs a single line."""

    def __init__(self, trie: Optional[TrieMap] = None, console: Optional[Console] = None,
                 config: Optional[Config] = None):
        self.trie = trie if trie is not None else TrieMap()
        self.console = console or Console()
        self.cfg = config or Config()
        self.running = True
        self._commands: Dict[str, Callable[[List[str]], None]] = {
            "/load": self._load,
            "/add": self._add,
            "/force": self._force,
            "/get": self._get,
            "/remove": self._remove,
            "/complete": self._complete,
            "/best": self._best,
            "/path": self._path,
            "/values": self._values,
            "/size": self._size,
            "/dump": self._dump,
            "/clear": self._clear,
            "/config": self._config,
            "/help": self._help,
            "/quit": self._quit,
        }

    def run(self):
        """Prompt loop until /quit or EOF."""
        self.console.rule("[bold magenta]TrieMap shell[/bold magenta]")
        self.console.print(f"[dim]{HELP}[/dim]\n")
        while self.running:
            try:
                line = Prompt.ask("[green]trie[/green]", default="", console=self.console)
            except (EOFError, KeyboardInterrupt):
                self._quit([])
                break
            if line:
                self.handle(line)

    def handle(self, line: str) -> None:
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self.console.print(f"[red]Bad input:[/red] {e}")
            return
        if not parts:
            return
        cmd, args = parts[0], parts[1:]
        action = self._commands.get(cmd)
        if action is None:
            self.console.print(f"[red]Unknown command:[/red] {escape(cmd)}")
            return
        action(args)

    # helpers -------------------------------------------------------------
    def _need(self, args: List[str], n: int, usage: str) -> bool:
        if len(args) < n:
            self.console.print(f"[yellow]usage:[/yellow] {usage}")
            return False
        return True

    def _show(self, label: str, value: Any) -> None:
        shown = "[dim](none)[/dim]" if value is None else escape(repr(value))
        self.console.print(f"[cyan]{escape(label)}:[/cyan] {shown}")

    def _keys_table(self, title: str, keys: List[str]) -> None:
        limit = int(self.cfg.get("max_results"))
        table = Table(title=escape(title), box=box.SIMPLE, show_edge=False)
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Key", style="bold")
        if self.cfg.get("show_values"):
            table.add_column("Value", style="magenta")
        for i, key in enumerate(keys[:limit], 1):
            row = [str(i), escape(key)]
            if self.cfg.get("show_values"):
                row.append(escape(repr(self.trie.get(key))))
            table.add_row(*row)
        self.console.print(table)
        if len(keys) > limit:
            self.console.print(f"[dim]... {len(keys) - limit} more[/dim]")

    # commands -------------------------------------------------------------
    def _load(self, args):
        if not self._need(args, 1, "/load FILE"):
            return
        props = TrieBackedProperties(self.trie)
        try:
            with Log.time_block(f"load {args[0]}"), open(args[0], "r", encoding="utf8") as f:
                count = props.load(f)
        except OSError as e:
            logger.warning("load failed for %s: %s", args[0], e)
            self.console.print(f"[red]Load failed:[/red] {escape(str(e))}")
            return
        self.console.print(f"[green]Loaded {count} entries.[/green]")

    def _add(self, args):
        if not self._need(args, 1, "/add KEY [VALUE]"):
            return
        value = args[1] if len(args) > 1 else None
        if self.trie.add(args[0], value):
            self.console.print(f"[green]Added:[/green] {escape(args[0])}")
        else:
            self.console.print(f"[yellow]Exists, use /force:[/yellow] {escape(args[0])}")

    def _force(self, args):
        if not self._need(args, 2, "/force KEY VALUE"):
            return
        self.trie.force_add(args[0], args[1])
        self.console.print(f"[green]Stored:[/green] {escape(args[0])}")

    def _get(self, args):
        if self._need(args, 1, "/get KEY"):
            self._show(args[0], self.trie.get(args[0]))

    def _remove(self, args):
        if self._need(args, 1, "/remove KEY"):
            self._show(f"removed {args[0]}", self.trie.remove(args[0]))

    def _complete(self, args):
        prefix = args[0] if args else ""
        self._keys_table(f"Completions for {prefix!r}", self.trie.get_completions(prefix))

    def _best(self, args):
        if self._need(args, 1, "/best PREFIX"):
            self._show("best path", self.trie.get_best_matching_path(args[0]))
            self._show("best value", self.trie.get_value_for_best_matching_key(args[0]))

    def _path(self, args):
        if self._need(args, 1, "/path PREFIX"):
            self._show("values on path", self.trie.get_values_on_path(args[0]))

    def _values(self, args):
        prefix = args[0] if args else ""
        values = self.trie.get_sub_values(prefix)
        self._show(f"values under {prefix!r}", values[: int(self.cfg.get("max_results"))])

    def _size(self, args):
        self.console.print(f"[cyan]size:[/cyan] {self.trie.size()}  [cyan]empty:[/cyan] {self.trie.is_empty()}")

    def _dump(self, args):
        self.console.print(Panel(escape(str(self.trie)), title="TrieMap", border_style="cyan"))

    def _clear(self, args):
        self.trie.clear()
        self.console.print("[yellow]Map cleared.[/yellow]")

    def _config(self, args):
        if len(args) >= 2:
            if self.cfg.set(args[0], args[1]):
                if args[0] == "log_level":
                    setup_logging(str(self.cfg.get("log_level")), self.console)
                self.console.print(f"[green]{args[0]} = {self.cfg.get(args[0])}[/green]")
            else:
                self.console.print(f"[red]Rejected option:[/red] {escape(args[0])}")
            return
        table = Table(title="Config", box=box.MINIMAL)
        table.add_column("Option", style="cyan")
        table.add_column("Value")
        for k, v in self.cfg.rows():
            table.add_row(k, v)
        self.console.print(table)

    def _help(self, args):
        self.console.print(Panel(HELP, title="Commands", border_style="yellow"))

    def _quit(self, args):
        self.console.rule("[red]Exiting[/red]")
        self.running = False


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="trie-map", description="Interactive TrieMap shell")
    parser.add_argument("files", nargs="*", help="property files to load at start")
    parser.add_argument("--config", default="trie_map_config.json", help="path of the JSON config")
    opts = parser.parse_args(argv)

    console = Console()
    cfg = Config(opts.config)
    setup_logging(str(cfg.get("log_level")), console)
    shell = TrieShell(console=console, config=cfg)
    for path in opts.files:
        shell.handle(f"/load {shlex.quote(path)}")
    shell.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
