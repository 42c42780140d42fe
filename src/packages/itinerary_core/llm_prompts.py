# src/packages/itinerary_core/llm_prompts.py
from packages.itinerary_core.config import CHAT_MODEL
from packages.itinerary_core.models import ChatMessage, UpstreamChatRequest

ROUTE_SYSTEM_PROMPT = "Eres un asistente de creación de rutas turísticas útil que responde solo en JSON."
TRAVEL_SYSTEM_PROMPT = "Eres un asistente útil que responde solo en JSON."

CIRCULAR_LABEL = "CIRCULAR (acaba donde empieza)"
LINEAR_LABEL = "LINEAL (ve de punto A a punto B)"


def route_type_label(circular: bool) -> str:
    return CIRCULAR_LABEL if circular else LINEAR_LABEL


def build_itinerary_prompt(
    location: str,
    interest: str,
    start: str,
    circular: bool,
    minutes: int,
    days: int,
) -> str:
    """
    Builds the user prompt asking for a day-by-day route that returns only JSON.
    Every day must begin at `start`, which also opens each day's list of stops.
    """
    return (
        f"Eres un guía experto. Crea un itinerario de {days} día(s) en {location}.\n"
        f"Intereses: \"{interest}\".\n"
        f"Duración por día: {minutes} minutos.\n"
        f"Inicio obligatorio cada día: \"{start}\".\n"
        f"Tipo de ruta: {route_type_label(circular)}.\n\n"
        "IMPORTANTE: Devuelve SOLO un JSON válido con esta estructura, sin texto extra:\n"
        "{\n"
        "    \"dias\": [\n"
        "        {\n"
        "            \"dia\": 1,\n"
        "            \"titulo\": \"Nombre de la zona\",\n"
        "            \"historia\": \"Breve descripción con emojis\",\n"
        f"            \"paradas\": [\"{start}\", \"Lugar 1\", \"Lugar 2\", \"Fin\"]\n"
        "        }\n"
        "    ]\n"
        "}"
    )


def build_chat_request(system_prompt: str, user_prompt: str, model: str = CHAT_MODEL) -> UpstreamChatRequest:
    """Two-message conversation: fixed system instruction, then the generated prompt."""
    return UpstreamChatRequest(
        model=model,
        messages=[
            ChatMessage(role="system", content=system_prompt),
            ChatMessage(role="user", content=user_prompt),
        ],
    )
