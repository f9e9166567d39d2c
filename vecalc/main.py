# main.py
"""
Interactive vector calculator.

The Session class owns the environment, the debug level and the variable store,
and turns each input line into a rendered result or an error message. The REPL
loop reads lines with prompt_toolkit (history and completion) and feeds them to
the session until '.exit' or end of input.

Configuration comes from the command line, falling back to environment
variables (a .env file is honoured):
  VECALC_HISTORY_FILE   history file (default ~/.vecalc_history)
  VECALC_DEBUG_LEVEL    initial debug level 0-9 (default 1)
"""

import argparse
import logging
import os
from typing import List, Optional, Tuple

from dotenv import load_dotenv
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory

from .errors import CalculatorError
from .evaluator import (
    DEFAULT_DEBUG_LEVEL,
    Binding,
    Environment,
    Evaluator,
    Load,
    Removal,
    Result,
    Save,
    SetDebugLevel,
    Terminate,
)
from .lexer import COMMAND_NAMES, Lexer
from .parser import Evaluation, Parser, VariableRef
from .store import JsonFileStore, SavedSession, VariableStore
from .values import OPERATOR_NAMES

logger = logging.getLogger(__name__)

HISTORY_FILE = os.path.expanduser("~/.vecalc_history")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Debug level at or above which every line's tokens and AST are logged.
TRACE_LEVEL = 3


def log_level_for(debug_level: int) -> int:
    if debug_level <= 0:
        return logging.WARNING
    if debug_level == 1:
        return logging.INFO
    return logging.DEBUG


class Session:
    """One calculator session: environment, debug level and store."""

    def __init__(self, store: Optional[VariableStore] = None, debug_level: int = DEFAULT_DEBUG_LEVEL):
        self.env = Environment()
        self.evaluator = Evaluator()
        self.store = store if store is not None else JsonFileStore()
        self.debug_level = DEFAULT_DEBUG_LEVEL
        self.set_debug_level(debug_level)

    def set_debug_level(self, level: int) -> None:
        self.debug_level = level
        logging.getLogger('vecalc').setLevel(log_level_for(level))

    def evaluate_line(self, line: str) -> Tuple[bool, str]:
        """Evaluate a single line. Returns (ok, output).

        Raises EOFError when the line is '.exit' so the caller can end the loop.
        """
        try:
            tokens = Lexer(line).tokenize()
            if self.debug_level >= TRACE_LEVEL:
                logger.debug(f"tokens: {tokens}")
            statement = Parser(tokens).parse()
            if self.debug_level >= TRACE_LEVEL:
                logger.debug(f"statement: {statement}")
            result = self.evaluator.execute(statement, self.env)
            if isinstance(statement, Evaluation) and isinstance(statement.expression, VariableRef):
                return True, f"{statement.expression.name} = {result}"
            return True, self._handle(result)
        except CalculatorError as e:
            return False, f"Error: {e}"
        except EOFError:
            raise
        except Exception as e:
            logger.exception("Unhandled error")
            return False, f"Unhandled error: {e}"

    def _handle(self, result: Result) -> str:
        if isinstance(result, Terminate):
            raise EOFError()
        if isinstance(result, Binding):
            return f"{result.name} = {result.value}"
        if isinstance(result, Removal):
            return f"Removed {result.name}"
        if isinstance(result, SetDebugLevel):
            self.set_debug_level(result.level)
            return f"Debug level set to {result.level}"
        if isinstance(result, Save):
            return self.save(result.path)
        if isinstance(result, Load):
            return self.load(result.path)
        return str(result)

    def save(self, path: str) -> str:
        saved = SavedSession.from_environment(self.env.snapshot(), self.debug_level)
        self.store.save(path, saved)
        return f"Saved {len(saved.variables)} variables to {path.strip()}"

    def load(self, path: str) -> str:
        saved = self.store.load(path)
        # Merge: names in the saved session overwrite current bindings.
        self.env.update(saved.to_values())
        self.set_debug_level(saved.debug_level)
        return f"Loaded {len(saved.variables)} variables from {path.strip()}"

    def completions(self) -> List[str]:
        commands = ['.' + name for name in COMMAND_NAMES]
        keywords = [op for op in OPERATOR_NAMES if op.isalpha()]
        return commands + keywords + list(self.env.names())

    def repl_loop(self, history_file: str = HISTORY_FILE) -> None:
        """Interactive REPL loop with file history and completion."""
        print("Vector calculator. Type .exit or Ctrl-D to quit.")
        prompt_session = PromptSession(history=FileHistory(history_file))
        while True:
            try:
                completer = WordCompleter(self.completions())
                line = prompt_session.prompt('>> ', completer=completer)
            except KeyboardInterrupt:
                print("^C")
                continue
            except EOFError:
                print("Exiting.")
                break
            if not line.strip():
                continue
            try:
                ok, out = self.evaluate_line(line)
            except EOFError:
                print("Exiting.")
                break
            print(out)


# --------------------------
# Entry point
# --------------------------

def _env_debug_level() -> int:
    raw = os.getenv("VECALC_DEBUG_LEVEL")
    if raw is None:
        return DEFAULT_DEBUG_LEVEL
    try:
        level = int(raw)
    except ValueError:
        level = -1
    if not 0 <= level <= 9:
        logger.warning(f"Ignoring invalid VECALC_DEBUG_LEVEL {raw!r}")
        return DEFAULT_DEBUG_LEVEL
    return level


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Interactive scalar and vector calculator.")
    parser.add_argument(
        "--history-file",
        type=str,
        default=os.getenv("VECALC_HISTORY_FILE", HISTORY_FILE),
        help="File used for prompt history (default: ~/.vecalc_history).",
    )
    parser.add_argument(
        "--debug-level",
        type=int,
        choices=range(10),
        default=_env_debug_level(),
        help="Initial debug level 0-9 (default: 1).",
    )
    parser.add_argument(
        "--load",
        type=str,
        help="Load a saved session before starting.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(format=LOG_FORMAT)

    session = Session(debug_level=args.debug_level)
    if args.load:
        try:
            print(session.load(args.load))
        except CalculatorError as e:
            print(f"Error: {e}")
            return 1
    session.repl_loop(os.path.expanduser(args.history_file))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
