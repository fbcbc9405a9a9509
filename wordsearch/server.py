import logging
from contextlib import contextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from wordsearch.errors import InvalidArgumentError, InvalidStateError
from wordsearch.lexicon import Lexicon
from wordsearch.settings import settings

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("wordsearch")


class SolveRequest(BaseModel):
    tiles: list[str]
    min_length: Optional[int] = None


class CheckRequest(BaseModel):
    tiles: list[str]
    word: str


class ScoreRequest(BaseModel):
    words: list[str]
    min_length: Optional[int] = None


@contextmanager
def _engine_errors():
    """Translate engine errors into HTTP errors."""
    try:
        yield
    except InvalidArgumentError as e:
        raise HTTPException(400, str(e)) from e
    except InvalidStateError as e:
        raise HTTPException(503, f"Dictionary not available: {e}") from e


def create_app(lexicon: Optional[Lexicon] = None) -> FastAPI:
    """Build the service. If no lexicon is given, one is loaded from settings at startup."""
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        if application.state.lexicon is None:
            application.state.lexicon = _load_configured_lexicon()
        yield

    application = FastAPI(title="Word Search Solver", lifespan=lifespan)
    application.state.lexicon = lexicon

    def _new_engine(tiles: list[str]):
        from wordsearch.engine import GameEngine

        if len(tiles) > settings.MAX_TILES:
            raise HTTPException(413, f"Too many tiles (max {settings.MAX_TILES})")
        with _engine_errors():
            return GameEngine(tiles, lexicon=application.state.lexicon or Lexicon())

    @application.get("/health")
    async def health():
        lex = application.state.lexicon
        return {
            "status": "ok",
            "lexicon_loaded": bool(lex),
            "word_count": len(lex) if lex is not None else 0,
        }

    @application.post("/solve")
    def solve(body: SolveRequest):
        from wordsearch.metrics import StageTimer
        from wordsearch.enumerator import score_words

        min_length = body.min_length if body.min_length is not None else settings.MIN_WORD_LENGTH
        timer = StageTimer("POST /solve")

        with timer.stage("board"):
            engine = _new_engine(body.tiles)
        logger.info("Board %dx%d: %s", engine.board.num_rows, engine.board.num_cols,
                    " / ".join(" ".join(row) for row in engine.board.rows()))

        with _engine_errors():
            with timer.stage("search"):
                paths = engine.find_all_paths(min_length)
            with timer.stage("score"):
                score = score_words(paths, min_length)

        all_words = list(paths)
        words = all_words[:settings.MAX_RESULTS] if settings.MAX_RESULTS > 0 else all_words
        logger.info("Found %d words (returning %d), score %d", len(all_words), len(words), score)
        timer.log_summary()

        result = {
            "grid_size": engine.board.num_rows,
            "board": engine.board.rows(),
            "min_length": min_length,
            "words": words,
            "word_count": len(all_words),
            "score": score,
            "processing_time": timer.total_ms,
            "stage_timings": timer.summary(),
        }
        if settings.INCLUDE_PATHS:
            result["paths"] = {w: paths[w] for w in words}
        return JSONResponse(result)

    @application.post("/check")
    def check(body: CheckRequest):
        engine = _new_engine(body.tiles)
        with _engine_errors():
            path = engine.is_on_board(body.word)
            return {
                "word": body.word.upper(),
                "valid_word": engine.is_valid_word(body.word),
                "valid_prefix": engine.is_valid_prefix(body.word),
                "on_board": bool(path),
                "path": path,
            }

    @application.post("/score")
    async def score(body: ScoreRequest):
        from wordsearch.enumerator import score_words

        min_length = body.min_length if body.min_length is not None else settings.MIN_WORD_LENGTH
        with _engine_errors():
            (application.state.lexicon or Lexicon()).require_loaded()
            return {"score": score_words(body.words, min_length), "min_length": min_length}

    @application.get("/api/settings")
    async def api_get_settings():
        from wordsearch.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from wordsearch.settings import update_settings, get_editable_settings
        body = await request.json()
        if not isinstance(body, dict):
            raise HTTPException(400, "Expected a JSON object")
        errors = update_settings(settings, **body)
        logger.setLevel(settings.LOG_LEVEL)
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


def _load_configured_lexicon() -> Optional[Lexicon]:
    from wordsearch.lexicon import load_lexicon

    dict_path = settings.DICTIONARY_PATH
    if not dict_path.is_file():
        logger.warning("Dictionary %s not found - solve endpoints will return 503", dict_path)
        return None
    logger.info("Loading dictionary from %s", dict_path)
    try:
        return load_lexicon(dict_path)
    except InvalidArgumentError as e:
        logger.error("Dictionary %s unusable: %s", dict_path, e)
        return None


app = create_app()
