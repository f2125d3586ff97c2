from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from linsolver import (
    check_diagonal_dominance,
    solve_direct,
    solve_jacobi,
    validate_jacobi_input,
)
from linsolver.settings import get_settings, reset_settings, save_settings

app = FastAPI(title="LinSolver API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class SystemRequest(BaseModel):
    coefficients: List[List[float]]
    constants: List[float] = Field(default_factory=list)


class JacobiRequest(SystemRequest):
    tolerance: Optional[float] = Field(default=None, gt=0)
    max_iterations: Optional[int] = Field(default=None, ge=0)


class IterationInfo(BaseModel):
    index: int
    old_values: List[float]
    new_values: List[float]
    per_variable_calculations: List[str]
    per_variable_absolute_errors: List[float]
    max_absolute_error: float
    converged: bool


class StepInfo(BaseModel):
    title: str
    description: str
    matrix: Optional[List[List[float]]] = None
    constants: Optional[List[float]] = None
    calculation: Optional[str] = None
    result: Optional[float | List[float]] = None
    solution: Optional[List[float]] = None
    equations: Optional[List[str]] = None
    initial_guess: Optional[List[float]] = None
    iterations: Optional[List[IterationInfo]] = None
    converged: Optional[bool] = None
    is_diagonally_dominant: Optional[bool] = None
    iteration_count: Optional[int] = None
    tolerance: Optional[float] = None
    explanation: Optional[str] = None


class SolveResponse(BaseModel):
    success: bool
    method: str
    steps: List[StepInfo]
    solution: Optional[List[float]] = None
    error: Optional[str] = None
    determinant: Optional[float] = None
    inverse: Optional[List[List[float]]] = None
    converged: Optional[bool] = None
    iteration_count: Optional[int] = None
    tolerance: Optional[float] = None
    is_diagonally_dominant: Optional[bool] = None
    verification_steps: List[StepInfo] = []


class ValidationResponse(BaseModel):
    valid: bool
    error: Optional[str] = None
    is_diagonally_dominant: Optional[bool] = None


class DominanceResponse(BaseModel):
    is_diagonally_dominant: bool


class SettingsUpdate(BaseModel):
    default_method: Optional[str] = None
    tolerance: Optional[float] = None
    max_iterations: Optional[int] = None
    log_level: Optional[str] = None


class SettingsResponse(BaseModel):
    default_method: str
    tolerance: float
    max_iterations: int
    log_level: str


def _require_matrix(req: SystemRequest) -> None:
    if not req.coefficients:
        raise HTTPException(status_code=400, detail="Coefficient matrix cannot be empty.")


@app.post("/api/solve/inverse", response_model=SolveResponse, response_model_exclude_none=True)
def solve_inverse(req: SystemRequest):
    _require_matrix(req)
    return solve_direct(req.coefficients, req.constants).to_dict()


@app.post("/api/solve/jacobi", response_model=SolveResponse, response_model_exclude_none=True)
def solve_iterative(req: JacobiRequest):
    _require_matrix(req)
    validation = validate_jacobi_input(req.coefficients, req.constants)
    if not validation.valid:
        return {"success": False, "method": "jacobi", "steps": [], "error": validation.error}

    settings = get_settings()
    tolerance = req.tolerance if req.tolerance is not None else settings["tolerance"]
    max_iterations = (
        req.max_iterations if req.max_iterations is not None
        else settings["max_iterations"]
    )
    return solve_jacobi(req.coefficients, req.constants, tolerance, max_iterations).to_dict()


@app.post("/api/validate", response_model=ValidationResponse, response_model_exclude_none=True)
def validate(req: SystemRequest):
    _require_matrix(req)
    return validate_jacobi_input(req.coefficients, req.constants).to_dict()


@app.post("/api/dominance", response_model=DominanceResponse)
def dominance(req: SystemRequest):
    _require_matrix(req)
    if any(len(row) != len(req.coefficients) for row in req.coefficients):
        raise HTTPException(status_code=400, detail="Coefficient matrix must be square")
    return {"is_diagonally_dominant": check_diagonal_dominance(req.coefficients)}


@app.get("/api/settings", response_model=SettingsResponse)
def read_settings():
    return get_settings()


@app.put("/api/settings", response_model=SettingsResponse)
def update_settings(req: SettingsUpdate):
    try:
        return save_settings(req.model_dump(exclude_none=True))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.delete("/api/settings", response_model=SettingsResponse)
def restore_default_settings():
    return reset_settings()
