# natividade_map/api/deps.py
from fastapi import Request

from natividade_map.services.map_controller import MapController


def get_controller(request: Request) -> MapController:
    """Controlador único do mapa, criado no lifespan da aplicação."""
    return request.app.state.controller
