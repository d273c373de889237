"""FastAPI application — state routes, WebSocket endpoint, game loop."""

import argparse
import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from .clock import GameClock
from .config import LOG_LEVELS, Settings, load_settings
from .connection_manager import ConnectionManager, build_error_msg, build_state_msg, speeds_table
from .engine import SnakeEngine
from .errors import ConfigurationError
from .models import SpeedTier, TickResult

logger = logging.getLogger(__name__)

try:
    settings = load_settings()
except ConfigurationError as e:
    # cli() reloads with flag overrides and reports anything still broken
    logger.warning("falling back to default settings: %s", e)
    settings = Settings()
engine = SnakeEngine(seed=settings.seed, speed_tier=settings.speed)
manager = ConnectionManager()


async def on_tick():
    result = engine.tick()
    if result.ended_run:
        logger.info("game over: %s", result.value)
    if result != TickResult.IDLE:
        await manager.broadcast(build_state_msg(engine.snapshot()))


clock = GameClock(on_tick, interval=engine.state.speed_tier.interval)


@asynccontextmanager
async def lifespan(app: FastAPI):
    clock.start()
    yield
    await clock.stop()


app = FastAPI(lifespan=lifespan)


@app.get("/state")
async def get_state():
    return engine.snapshot().to_dict()


@app.get("/speeds")
async def get_speeds():
    return speeds_table()


def change_speed(tier) -> SpeedTier:
    tier = engine.set_speed_tier(tier)
    clock.set_interval(tier.interval)
    return tier


def handle_message(msg) -> Optional[str]:
    """Apply one client message to the engine. Returns an error detail, if any."""
    if not isinstance(msg, dict):
        return "message must be a JSON object"
    kind = msg.get("type")
    try:
        if kind == "start":
            engine.start()
        elif kind == "reset":
            engine.reset()
        elif kind == "pause":
            engine.toggle_pause()
        elif kind == "input":
            engine.set_direction(msg.get("direction"))
        elif kind == "speed":
            change_speed(msg.get("tier"))
        else:
            return f"unknown message type: {kind!r}"
    except ConfigurationError as e:
        return str(e)
    return None


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await manager.connect(ws)
    try:
        await manager.send_personal(ws, build_state_msg(engine.snapshot()))
        while True:
            raw = await ws.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("bad message from client: %.80r", raw)
                await manager.send_personal(ws, build_error_msg("invalid JSON"))
                continue
            error = handle_message(msg)
            if error:
                logger.info("rejected message %.80r: %s", raw, error)
                await manager.send_personal(ws, build_error_msg(error))
                continue
            await manager.broadcast(build_state_msg(engine.snapshot()))
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(ws)


def cli(argv=None):
    parser = argparse.ArgumentParser(description="Snake arcade game server")
    parser.add_argument("--host")
    parser.add_argument("--port", type=int)
    parser.add_argument("--speed", choices=[t.value for t in SpeedTier])
    parser.add_argument("--seed", type=int)
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS)
    args = parser.parse_args(argv)

    try:
        run_settings = load_settings(
            host=args.host, port=args.port, speed=args.speed,
            seed=args.seed, log_level=args.log_level,
        )
    except ConfigurationError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=run_settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    change_speed(run_settings.speed)
    if run_settings.seed is not None:
        engine.rng.seed(run_settings.seed)

    import uvicorn
    logger.info("Snake server starting on http://%s:%d", run_settings.host, run_settings.port)
    uvicorn.run(app, host=run_settings.host, port=run_settings.port)


if __name__ == "__main__":
    cli()
