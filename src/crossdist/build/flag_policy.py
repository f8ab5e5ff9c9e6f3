"""Per-target Flag Policy.

This module decides which extra compiler/linker flags a target needs and
provides FlagSet, the immutable value carrying them into one cargo
invocation.

Design:
    - flags_for() is pure: no I/O, same FlagSet for the same target
    - FlagSet values are appended to a copy of the environment, never to
      os.environ, so flags cannot leak from one target into the next
    - Windows GNU targets link the C/C++ runtime statically
    - 32-bit Windows GNU additionally aborts on panic
"""

from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from ..targets import TargetId


class FlagSet(Mapping[str, Tuple[str, ...]]):
    """Immutable mapping of environment variable name to flag tokens.

    Example:
        >>> flags = FlagSet({"RUSTFLAGS": ["-C", "panic=abort"]})
        >>> flags.apply({"RUSTFLAGS": "-C opt-level=3"})["RUSTFLAGS"]
        '-C opt-level=3 -C panic=abort'
    """

    def __init__(self, flags: Optional[Mapping[str, Iterable[str]]] = None):
        self._flags: Dict[str, Tuple[str, ...]] = {}
        for name, values in (flags or {}).items():
            values = tuple(values)
            if values:
                self._flags[name] = values

    def __getitem__(self, name: str) -> Tuple[str, ...]:
        return self._flags[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._flags)

    def __len__(self) -> int:
        return len(self._flags)

    def __hash__(self) -> int:
        return hash(frozenset(self._flags.items()))

    def __repr__(self) -> str:
        return f"FlagSet({self._flags!r})"

    def merged(self, other: Mapping[str, Iterable[str]]) -> "FlagSet":
        """Return a new FlagSet with other's flags appended after ours."""
        combined = {name: list(values) for name, values in self._flags.items()}
        for name, values in other.items():
            combined.setdefault(name, []).extend(values)
        return FlagSet(combined)

    def issuperset(self, other: Mapping[str, Iterable[str]]) -> bool:
        """True if every flag token of other is present under the same variable."""
        for name, values in other.items():
            if not set(values) <= set(self._flags.get(name, ())):
                return False
        return True

    def apply(self, environ: Mapping[str, str]) -> Dict[str, str]:
        """Return a copy of environ with these flags appended.

        Args:
            environ: Base environment (left untouched)

        Returns:
            New environment dictionary
        """
        env = dict(environ)
        for name, values in self._flags.items():
            existing = env.get(name, "").strip()
            joined = " ".join(values)
            env[name] = f"{existing} {joined}" if existing else joined
        return env


# The client pulls in Dear ImGui, whose Win32 clipboard/IME helpers include
# Windows.h; they are disabled for the GNU ABI builds.
WINDOWS_GNU_CXXFLAGS: Tuple[str, ...] = (
    "-DIMGUI_DISABLE_WIN32_DEFAULT_CLIPBOARD_FUNCTIONS",
    "-DIMGUI_DISABLE_WIN32_DEFAULT_IME_FUNCTIONS",
    "-static",
    "-static-libstdc++",
    "-static-libgcc",
)

WINDOWS_GNU_RUSTFLAGS: Tuple[str, ...] = (
    "-Clink-arg=-static",
    "-Clink-arg=-static-libgcc",
    "-Clink-arg=-static-libstdc++",
)

# 32-bit Windows GNU has no SEH unwinding
PANIC_ABORT_RUSTFLAGS: Tuple[str, ...] = ("-C", "panic=abort")

WINDOWS_GNU_OS = "windows-gnu"
PANIC_ABORT_TARGETS = frozenset({TargetId("i686", "pc", WINDOWS_GNU_OS)})


class FlagPolicy:
    """Maps targets to the extra flags their builds require."""

    @staticmethod
    def flags_for(target: TargetId) -> FlagSet:
        """Get the flag overrides for a target.

        Args:
            target: Target being built

        Returns:
            FlagSet to append to the build environment (empty for targets
            without special requirements)
        """
        cxxflags = []
        rustflags = []

        if target.os == WINDOWS_GNU_OS:
            cxxflags.extend(WINDOWS_GNU_CXXFLAGS)
            rustflags.extend(WINDOWS_GNU_RUSTFLAGS)

        if target in PANIC_ABORT_TARGETS:
            rustflags.extend(PANIC_ABORT_RUSTFLAGS)

        return FlagSet({"CXXFLAGS": cxxflags, "RUSTFLAGS": rustflags})


def flags_for(target: TargetId) -> FlagSet:
    return FlagPolicy.flags_for(target)
