"""FastAPI-powered web UI for playing the Jeopardy board in the browser."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field

from .config import GameConfig
from .game import Coordinate
from .jservice import JServiceClient
from .orchestrator import GameOrchestrator, SetupOutcome
from .surface import WebSurface


class ClickRequest(BaseModel):
    """Request payload for clicking a clue cell."""

    model_config = ConfigDict(populate_by_name=True)

    # Range checks happen on the board so bad clicks stay a logged no-op.
    category_index: int = Field(alias="categoryIndex")
    clue_index: int = Field(alias="clueIndex")


def build_orchestrator(config: Optional[GameConfig] = None) -> GameOrchestrator:
    """Wire a live API client and a web surface from ``config``."""

    config = config or GameConfig.from_env()
    client = JServiceClient(
        config.api_base, num_clues=config.num_clues, timeout=config.http_timeout
    )
    return GameOrchestrator(client, WebSurface(), config)


def create_app(orchestrator: Optional[GameOrchestrator] = None) -> FastAPI:
    """Create the app.

    Without an explicit orchestrator one is built from the environment when the
    app starts up, and its API client is closed on shutdown. Every handler that
    touches the board is a coroutine so board access stays on the event loop.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "orchestrator", None) is None:
            app.state.orchestrator = build_orchestrator()
        yield
        source = app.state.orchestrator.source
        if isinstance(source, JServiceClient):
            await source.aclose()

    app = FastAPI(
        title="Jeopardy",
        description="Trivia board with clues fetched from a jService API",
        lifespan=lifespan,
    )
    app.state.orchestrator = orchestrator

    def _orchestrator(request: Request) -> GameOrchestrator:
        return request.app.state.orchestrator

    def _view(orch: GameOrchestrator) -> Dict[str, object]:
        return orch.surface.snapshot()

    @app.get("/api/board")
    async def get_board(request: Request) -> Dict[str, object]:
        return _view(_orchestrator(request))

    @app.post("/api/game")
    async def start_game(request: Request) -> Dict[str, object]:
        orch = _orchestrator(request)
        outcome = await orch.start()
        if outcome is SetupOutcome.REJECTED:
            raise HTTPException(status_code=409, detail="A game is already being set up")
        return _view(orch)

    @app.post("/api/board/click")
    async def click_cell(request: Request, click: ClickRequest) -> Dict[str, object]:
        orch = _orchestrator(request)
        orch.surface.dispatch_click(Coordinate(click.category_index, click.clue_index))
        return _view(orch)

    @app.get("/", response_class=HTMLResponse)
    def index() -> str:
        return HTML_PAGE

    return app


app = create_app()


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Jeopardy</title>
    <link rel=\"preconnect\" href=\"https://fonts.googleapis.com\" />
    <link rel=\"preconnect\" href=\"https://fonts.gstatic.com\" crossorigin />
    <link
      href=\"https://fonts.googleapis.com/css2?family=Poppins:wght@400;500;600;700&display=swap\"
      rel=\"stylesheet\"
    />
    <style>
      :root {
        color-scheme: light;
        font-family: 'Poppins', system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
        font-weight: 400;
      }
      * {
        box-sizing: border-box;
      }
      body {
        margin: 0;
        background: radial-gradient(circle at top, #1b2a8f, #0f1a66 45%, #070d3d 80%);
        min-height: 100vh;
        display: flex;
        justify-content: center;
        padding: 2rem 1rem 3rem;
        color: #f5f7ff;
      }
      main {
        width: min(1100px, 100%);
      }
      h1 {
        margin: 0 0 1.25rem;
        font-size: clamp(1.8rem, 2.4vw + 1.2rem, 2.8rem);
        text-align: center;
        letter-spacing: 0.12em;
        text-transform: uppercase;
        color: #ffd24a;
        text-shadow: 0 3px 8px rgba(0, 0, 0, 0.35);
      }
      .controls {
        display: flex;
        justify-content: center;
        margin-bottom: 1.5rem;
      }
      button {
        font-size: 1rem;
        padding: 0.55rem 1.25rem;
        border-radius: 999px;
        border: 1px solid rgba(255, 210, 74, 0.6);
        background: #ffd24a;
        color: #0c155a;
        font-weight: 600;
        cursor: pointer;
        font-family: inherit;
        transition: transform 0.1s ease, box-shadow 0.1s ease;
      }
      button:hover {
        transform: translateY(-1px);
        box-shadow: 0 8px 18px rgba(0, 0, 0, 0.25);
      }
      button:disabled {
        cursor: default;
        opacity: 0.6;
        transform: none;
        box-shadow: none;
      }
      table#jeopardy {
        width: 100%;
        border-collapse: separate;
        border-spacing: 0.4rem;
        table-layout: fixed;
      }
      #jeopardy th,
      #jeopardy td {
        background: #0c1ea8;
        border-radius: 8px;
        text-align: center;
        vertical-align: middle;
        padding: 0.6rem;
        box-shadow: inset 0 0 0 1px rgba(255, 255, 255, 0.08);
      }
      #jeopardy th {
        height: 5.5rem;
        font-size: 0.95rem;
        text-transform: uppercase;
        letter-spacing: 0.04em;
      }
      #jeopardy td {
        height: 6.5rem;
        cursor: pointer;
        font-size: 0.95rem;
      }
      #jeopardy td.placeholder {
        font-size: 2.4rem;
        font-weight: 700;
        color: #ffd24a;
      }
      .category-title {
        display: inline-block;
        overflow-wrap: anywhere;
      }
      #loading-overlay {
        position: fixed;
        inset: 0;
        display: none;
        align-items: center;
        justify-content: center;
        background: rgba(7, 13, 61, 0.75);
      }
      .spinner {
        width: 3rem;
        height: 3rem;
        border-radius: 999px;
        border: 5px solid rgba(255, 255, 255, 0.2);
        border-top-color: #ffd24a;
        animation: spin 0.8s linear infinite;
      }
      @keyframes spin {
        to {
          transform: rotate(360deg);
        }
      }
      @media (max-width: 720px) {
        #jeopardy th,
        #jeopardy td {
          font-size: 0.75rem;
          padding: 0.3rem;
        }
      }
    </style>
  </head>
  <body>
    <main>
      <h1>Jeopardy!</h1>
      <div class=\"controls\">
        <button id=\"start-btn\" type=\"button\">Start / Restart</button>
      </div>
      <table id=\"jeopardy\">
        <thead></thead>
        <tbody></tbody>
      </table>
    </main>
    <div id=\"loading-overlay\" aria-hidden=\"true\">
      <div class=\"spinner\" role=\"status\" aria-label=\"Loading\"></div>
    </div>
    <script>
      const table = document.getElementById('jeopardy');
      const thead = table.querySelector('thead');
      const tbody = table.querySelector('tbody');
      const startButton = document.getElementById('start-btn');
      const overlay = document.getElementById('loading-overlay');
      let renderedGeneration = null;
      let isRequestPending = false;

      function showLoadingView() {
        overlay.style.display = 'flex';
        overlay.setAttribute('aria-hidden', 'false');
        document.body.setAttribute('aria-busy', 'true');
      }

      function hideLoadingView() {
        overlay.style.display = 'none';
        overlay.setAttribute('aria-hidden', 'true');
        document.body.removeAttribute('aria-busy');
      }

      function fillCell(td, cell) {
        // Cell HTML is sanitized on the server before it gets here.
        td.innerHTML = cell.html;
        td.classList.toggle('placeholder', !cell.revealed);
      }

      function fillTable(view) {
        thead.innerHTML = '';
        tbody.innerHTML = '';
        const headRow = document.createElement('tr');
        view.categories.forEach((title) => {
          const th = document.createElement('th');
          const span = document.createElement('span');
          span.className = 'category-title';
          span.innerHTML = title;
          th.appendChild(span);
          headRow.appendChild(th);
        });
        thead.appendChild(headRow);

        view.rows.forEach((row) => {
          const tr = document.createElement('tr');
          row.forEach((cell) => {
            const td = document.createElement('td');
            td.className = 'clue-cell';
            td.dataset.cat = cell.categoryIndex;
            td.dataset.clue = cell.clueIndex;
            fillCell(td, cell);
            tr.appendChild(td);
          });
          tbody.appendChild(tr);
        });
        renderedGeneration = view.generation;
      }

      function updateCells(view) {
        view.rows.forEach((row) => {
          row.forEach((cell) => {
            const td = tbody.querySelector(
              `td[data-cat=\"${cell.categoryIndex}\"][data-clue=\"${cell.clueIndex}\"]`
            );
            if (!td || !cell.revealed) return;
            fillCell(td, cell);
          });
        });
      }

      function setView(view) {
        if (view.generation !== renderedGeneration) {
          fillTable(view);
        } else {
          updateCells(view);
        }
        if (view.loading) {
          showLoadingView();
        } else {
          hideLoadingView();
        }
        startButton.disabled = isRequestPending || !view.startEnabled;
      }

      async function setupAndStart() {
        if (isRequestPending) return;
        isRequestPending = true;
        startButton.disabled = true;
        showLoadingView();
        try {
          const response = await fetch('/api/game', { method: 'POST' });
          if (response.status === 409) {
            console.warn('A game is already being set up');
            return;
          }
          if (!response.ok) {
            throw new Error('Unable to start game');
          }
          const view = await response.json();
          isRequestPending = false;
          setView(view);
        } catch (error) {
          console.error('Game setup failed', error);
        } finally {
          isRequestPending = false;
          startButton.disabled = false;
          hideLoadingView();
        }
      }

      async function handleClick(evt) {
        const td = evt.target.closest('td.clue-cell');
        if (!td) return;
        try {
          const response = await fetch('/api/board/click', {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify({
              categoryIndex: Number.parseInt(td.dataset.cat, 10),
              clueIndex: Number.parseInt(td.dataset.clue, 10),
            }),
          });
          if (!response.ok) return;
          setView(await response.json());
        } catch (error) {
          console.error('Click failed', error);
        }
      }

      table.addEventListener('click', handleClick);
      startButton.addEventListener('click', setupAndStart);
      setupAndStart();
    </script>
  </body>
</html>
"""
