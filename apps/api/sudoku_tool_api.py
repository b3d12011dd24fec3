# sudoku_tool_api.py
# Optional FastAPI wrapper for the tool functions.
# Run with: uvicorn apps.api.sudoku_tool_api:app --reload
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field
from typing import List, Optional

from sudoku_propagation.solver_core import (
    DEFAULT_MAX_CHECKS,
    DEFAULT_MAX_CHECKS_WITHOUT_ACTION,
    ConstructionError,
    InternalConsistencyError,
    grid_from_string,
)
from sudoku_propagation.sudoku_tools import compute_candidates_tool, sanity_check, solve_tool

app = FastAPI(title="Sudoku Propagation Solver API")

class GridModel(BaseModel):
    grid: List[List[int]]

class SolveRequest(BaseModel):
    grid: Optional[List[List[int]]] = None
    puzzle: Optional[str] = None  # 81-char alternative to `grid`
    max_checks: int = Field(DEFAULT_MAX_CHECKS, gt=0)
    max_checks_without_action: int = Field(DEFAULT_MAX_CHECKS_WITHOUT_ACTION, gt=0)
    include_actions: bool = True

class SanityRequest(BaseModel):
    original: List[List[int]]
    current: List[List[int]]

@app.get("/health")
def api_health():
    return {"ok": True}

@app.post("/solve")
def api_solve(req: SolveRequest):
    try:
        if req.grid is not None and req.puzzle is not None:
            raise ConstructionError("Provide either 'grid' or 'puzzle', not both")
        if req.grid is not None:
            grid = req.grid
        elif req.puzzle is not None:
            grid = grid_from_string(req.puzzle)
        else:
            raise ConstructionError("Provide either 'grid' or 'puzzle'")
        return solve_tool(grid, req.max_checks, req.max_checks_without_action, req.include_actions)
    except ConstructionError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except InternalConsistencyError as e:
        raise HTTPException(status_code=500, detail=str(e))

@app.post("/candidates")
def api_cands(payload: GridModel):
    try:
        return compute_candidates_tool(payload.grid)
    except ConstructionError as e:
        raise HTTPException(status_code=422, detail=str(e))

@app.post("/sanity_check")
def api_sanity(payload: SanityRequest):
    try:
        return sanity_check(payload.original, payload.current)
    except ConstructionError as e:
        raise HTTPException(status_code=422, detail=str(e))
