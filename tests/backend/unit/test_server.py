"""
Unit tests for core.server listener activation.
Binds an ephemeral port on 127.0.0.1.
"""
import asyncio

import pytest
import uvicorn
from fastapi import FastAPI

from noticeboard.core.server import NoticeBoardServer


@pytest.mark.asyncio
async def test_on_listening_runs_once_socket_is_bound():
    app = FastAPI()
    config = uvicorn.Config(app, host="127.0.0.1", port=0, lifespan="off", log_config=None)
    calls = []
    server = NoticeBoardServer(config, on_listening=lambda: calls.append(server.started))

    task = asyncio.create_task(server.serve())
    for _ in range(200):
        if calls:
            break
        await asyncio.sleep(0.01)
    server.should_exit = True
    await asyncio.wait_for(task, timeout=5)

    assert calls == [True]


@pytest.mark.asyncio
async def test_on_listening_optional():
    app = FastAPI()
    config = uvicorn.Config(app, host="127.0.0.1", port=0, lifespan="off", log_config=None)
    server = NoticeBoardServer(config)

    task = asyncio.create_task(server.serve())
    for _ in range(200):
        if server.started:
            break
        await asyncio.sleep(0.01)
    server.should_exit = True
    await asyncio.wait_for(task, timeout=5)

    assert server.started is True
