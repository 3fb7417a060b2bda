"""Nox automation sessions for unisplit."""

from __future__ import annotations

import nox

nox.options.sessions = ("lint", "typecheck", "tests")
nox.options.reuse_existing_virtualenvs = True


def _install_project(session: nox.Session, *extras: str) -> None:
    target = f".[{','.join(extras)}]" if extras else "."
    session.install("-e", target)


@nox.session()
def lint(session: nox.Session) -> None:
    session.install("black", "flake8")
    session.run("black", "--check", "unisplit", "tests")
    session.run("flake8", "--max-line-length", "100", "unisplit", "tests")


@nox.session()
def typecheck(session: nox.Session) -> None:
    session.install("mypy")
    _install_project(session)
    session.run("mypy", "unisplit")


@nox.session()
def tests(session: nox.Session) -> None:
    _install_project(session, "test")
    session.run("pytest", "tests")
