from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from dataclasses import asdict
from typing import Dict, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from scheduler import get_scheduler
from simulation import Simulation, SimulationAbortedError, SimulationConfig, build_simulation

logger = logging.getLogger(__name__)


class ScenarioRequest(BaseModel):
    name: str = "scenario"
    scenario: str = "random"
    seed: Optional[int] = None
    elevator_count: int = 2
    human_count: int = 50
    floors: int = 10
    smart_initial_direction: bool = True
    max_steps: int = 100_000


class AlgorithmSelection(BaseModel):
    name: str
    options: Dict[str, object] = {}


class StepRequest(BaseModel):
    count: int = 1


class SimulationManager:
    def __init__(self, config: Optional[SimulationConfig] = None, tick_interval: float = 0.25) -> None:
        self.config = config or SimulationConfig(seed=0)
        self.simulation = self._build(self.config)
        self.tick_interval = tick_interval
        self.aborted: Optional[str] = None
        self.clients: Set[WebSocket] = set()
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    async def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _run(self) -> None:
        while True:
            async with self._lock:
                self._advance(1)
                payload = self.current_state()
            await self.broadcast(payload)
            await asyncio.sleep(self.tick_interval)

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except WebSocketDisconnect:
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        metrics = asdict(self.simulation.metrics.snapshot(self.simulation.step_count))
        return {
            "scenario": self.config.name,
            "seed": self.simulation.seed,
            "scheduler": self.config.scheduler,
            "scheduler_options": self.config.scheduler_options,
            "state": self.simulation.snapshot(),
            "metrics": metrics,
            "aborted": self.aborted,
        }

    async def reset(self, config: SimulationConfig) -> dict:
        async with self._lock:
            simulation = self._build(config)
            self.config = config
            self.simulation = simulation
            self.aborted = None
            return self.current_state()

    async def set_scheduler(self, name: str, options: Dict[str, object]) -> dict:
        try:
            get_scheduler(name, **options)
        except TypeError as exc:
            raise ValueError(f"Invalid options for scheduler '{name}': {exc}") from exc
        async with self._lock:
            self.config.scheduler = name.lower()
            self.config.scheduler_options = dict(options)
            return self.current_state()

    async def step(self, count: int) -> dict:
        async with self._lock:
            self._advance(count)
            return self.current_state()

    def _advance(self, count: int) -> None:
        if self.aborted or self.simulation.is_done():
            return
        for _ in range(count):
            try:
                self.simulation.step()
            except SimulationAbortedError as exc:
                self.aborted = str(exc)
                logger.error("Simulation %s aborted: %s", self.config.name, exc)
                return
            if self.simulation.is_done():
                return

    @staticmethod
    def _build(config: SimulationConfig) -> Simulation:
        simulation = build_simulation(config)
        simulation.start()
        logger.info("Simulation %s ready (seed %s)", config.name, simulation.seed)
        return simulation


manager = SimulationManager()
app = FastAPI(title="Paternoster Simulation API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup() -> None:
    await manager.start()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await manager.stop()


@app.get("/state")
async def get_state() -> dict:
    return manager.current_state()


@app.post("/simulation")
async def reset_simulation(request: ScenarioRequest) -> dict:
    config = SimulationConfig(
        name=request.name,
        scenario=request.scenario,
        seed=request.seed,
        elevator_count=request.elevator_count,
        human_count=request.human_count,
        floors=request.floors,
        scheduler=manager.config.scheduler,
        scheduler_options=manager.config.scheduler_options,
        smart_initial_direction=request.smart_initial_direction,
        max_steps=request.max_steps,
    )
    try:
        return await manager.reset(config)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/step")
async def step_simulation(request: StepRequest) -> dict:
    if request.count < 1:
        raise HTTPException(status_code=400, detail="Step count must be positive")
    if manager.aborted:
        raise HTTPException(status_code=409, detail=manager.aborted)
    return await manager.step(request.count)


@app.post("/algorithm")
async def set_algorithm(selection: AlgorithmSelection) -> dict:
    try:
        return await manager.set_scheduler(selection.name, selection.options)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.websocket("/ws/stream")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await manager.register(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await manager.unregister(websocket)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
