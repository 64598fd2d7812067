"""Test harness configuration: discriminated union on the `type` field."""

import shlex
from typing import Annotated, Literal, TypeAlias

from pydantic import BaseModel, Field


class CargoHarness(BaseModel, frozen=True):
    """Rust `cargo test`."""

    type: Literal["cargo"]
    features: list[str] = Field(default_factory=list)
    release: bool = False

    def test_command(self) -> tuple[str, list[str]]:
        args = ["test"]
        if self.features:
            args.extend(["--features", ",".join(self.features)])
        if self.release:
            args.append("--release")
        # --format=json needs a nightly toolchain, so the plain-text grammar
        # is what stable sandboxes actually produce.
        return "cargo", args


class NpmHarness(BaseModel, frozen=True):
    """Node.js `npm run <script>`."""

    type: Literal["npm"]
    script: str = Field(default="test", min_length=1)

    def test_command(self) -> tuple[str, list[str]]:
        return "npm", ["run", self.script]


class PytestHarness(BaseModel, frozen=True):
    """Python pytest in verbose mode."""

    type: Literal["pytest"]
    args: list[str] = Field(default_factory=list)

    def test_command(self) -> tuple[str, list[str]]:
        return "pytest", ["-v", "--tb=short", *self.args]


class GoHarness(BaseModel, frozen=True):
    """`go test -v <package>`."""

    type: Literal["go"]
    package: str = Field(default="./...", min_length=1)

    def test_command(self) -> tuple[str, list[str]]:
        return "go", ["test", "-v", self.package]


class CustomHarness(BaseModel, frozen=True):
    """Arbitrary command; graded with the generic summary-line heuristic."""

    type: Literal["custom"]
    command: str = Field(min_length=1)
    args: list[str] = Field(default_factory=list)

    def test_command(self) -> tuple[str, list[str]]:
        return self.command, list(self.args)


Harness: TypeAlias = Annotated[
    CargoHarness | NpmHarness | PytestHarness | GoHarness | CustomHarness,
    Field(discriminator="type"),
]

HARNESS_TYPES: tuple[str, ...] = ("cargo", "npm", "pytest", "go", "custom")


def render_test_command(harness: Harness) -> str:
    """Join a harness's command and quoted arguments into one shell line.

    The command itself is kept verbatim so custom harnesses can use shell syntax.
    """
    command, args = harness.test_command()
    return shell_line(command, args)


def shell_line(command: str, args: list[str]) -> str:
    if not args:
        return command
    return f"{command} {shlex.join(args)}"
