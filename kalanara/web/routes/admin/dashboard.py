"""Statistiques du tableau de bord."""

from dataclasses import asdict

from fastapi import APIRouter, Request

router = APIRouter(tags=["admin"])


@router.get("/dashboard")
def dashboard(request: Request):
    container = request.app.state.container
    return asdict(container.dashboard_service().get_stats())
