"""Command-line entrypoint and line-oriented catalogue console."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import typer

from scpbrowser import __version__
from scpbrowser.cache import CatalogueCache
from scpbrowser.config import Settings
from scpbrowser.errors import ScpBrowserError
from scpbrowser.fetcher import Fetcher, build_http_client
from scpbrowser.loader import CatalogueLoader
from scpbrowser.logging_config import configure_logging
from scpbrowser.session import BrowserSession
from scpbrowser.state import Phase, View

if TYPE_CHECKING:
    from scpbrowser.models.catalogue import Record
    from scpbrowser.models.detail import DetailPage
    from scpbrowser.state import BrowserState

# Rows printed around the cursor in the object list.
LIST_WINDOW = 15

BACK_HINT = ":b назад"

HELP_TEXT = (
    "Введите текст для поиска. Команды: "
    ":n следующий  :p предыдущий  :o открыть  :b назад  :c сбросить поиск  :q выйти"
)

app = typer.Typer(
    help="Браузер каталога SCP Foundation в терминале",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.command()
def main(
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Только загрузить и разобрать каталог, без интерактивного режима",
    ),
    refresh: bool = typer.Option(
        False,
        "--refresh",
        help="Игнорировать кэш и заново загрузить каталог",
    ),
    version: bool = typer.Option(
        False,
        "-v",
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Вывести версию",
    ),
) -> None:
    settings = Settings()
    configure_logging(settings.logging)
    exit_code = asyncio.run(_run(settings, debug=debug, refresh=refresh))
    if exit_code:
        raise typer.Exit(exit_code)


async def _run(settings: Settings, *, debug: bool, refresh: bool) -> int:
    async with build_http_client(settings.fetcher) as client:
        fetcher = Fetcher(client, settings.source)
        loader = CatalogueLoader(fetcher, CatalogueCache(settings.cache.path), settings)
        session = BrowserSession(loader, fetcher)
        session.start(refresh=refresh)

        if not debug:
            typer.echo("SCP Объекты (Загружаются)...")
        state = await session.await_catalogue()
        if state.phase is Phase.FAILED:
            typer.echo(f"Не удалось загрузить каталог: {state.error}", err=True)
            return 1

        if debug:
            typer.echo(f"Загружено объектов: {len(state.catalogue)}")
            return 0

        await _console(session)
        return 0


# ---------------------------------------------------------------------------
# Console loop
# ---------------------------------------------------------------------------


async def _console(session: BrowserSession) -> None:
    state = session.state
    typer.echo(HELP_TEXT)
    _print_list(state)

    while True:
        try:
            line = await asyncio.to_thread(
                typer.prompt, ">", default="", show_default=False, prompt_suffix=" "
            )
        except typer.Abort:
            return
        command = line.strip()

        if command == ":q":
            return
        if state.view is View.DETAIL:
            if command == ":b":
                state.close_detail()
                _print_list(state)
            else:
                typer.echo(BACK_HINT)
            continue

        if command == ":n":
            state.next()
        elif command == ":p":
            state.previous()
        elif command == ":c":
            state.set_query("")
            state.cancel_search()
        elif command == ":o":
            record = state.open_detail()
            if record is None:
                typer.echo("Объект не выбран")
                continue
            await _show_detail(session, record)
            continue
        elif command:
            state.set_query(command)
            state.submit_search()
        _print_list(state)


async def _show_detail(session: BrowserSession, record: Record) -> None:
    try:
        page = await session.fetch_detail(record)
    except ScpBrowserError as exc:
        typer.echo(f"Ошибка: {exc}", err=True)
        session.state.close_detail()
        return
    if page is None:
        typer.echo(f"{record.document_name}: страница недоступна")
        session.state.close_detail()
        return
    _print_detail(page)


def format_record(record: Record) -> str:
    return f"[{record.classification.label}] {record.document_name} - {record.display_name}"


def _print_list(state: BrowserState) -> None:
    selection = state.selection
    items = selection.items
    if state.query:
        typer.echo(f"Поиск: {state.query} ({len(items)})")
    if not items:
        typer.echo("Ничего не найдено")
        return

    cursor = selection.index or 0
    start = max(0, min(cursor - LIST_WINDOW // 2, len(items) - LIST_WINDOW))
    for i, record in enumerate(items[start : start + LIST_WINDOW], start=start):
        marker = "☛" if i == selection.index else " "
        typer.echo(f"{marker} {format_record(record)}")


def _print_detail(page: DetailPage) -> None:
    typer.echo(page.title or page.page_id)
    if page.tags:
        typer.echo("Теги: " + ", ".join(page.tags))
    if page.locked:
        typer.echo("(страница заблокирована)")
    typer.echo("")
    typer.echo(page.source)
    typer.echo(BACK_HINT)
