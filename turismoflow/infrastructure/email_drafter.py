"""
Partner e-mail drafts via the Gemini generative-language REST API.

The draft is shown to the operator for review before sending. Failures never raise:
the operator gets a readable placeholder instead.
"""

import logging
from typing import Any, List, Optional, Protocol, Sequence

import httpx

_logger = logging.getLogger(__name__)

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

MISSING_KEY_MESSAGE = "Erro: Chave de API ausente."
EMPTY_DRAFT_MESSAGE = "Não foi possível gerar o rascunho do e-mail."
FAILED_DRAFT_MESSAGE = "Erro ao gerar o rascunho. Por favor, tente novamente mais tarde."


class EmailDrafter(Protocol):
    def draft_partner_email(
        self,
        partner_name: str,
        passenger_count: int,
        trip_details: str,
        passenger_names: Sequence[str],
    ) -> str:
        ...


def build_partner_prompt(
    partner_name: str,
    passenger_count: int,
    trip_details: str,
    passenger_names: Sequence[str],
) -> str:
    return f"""
Você é um assistente de uma agência de turismo receptivo.
Escreva um e-mail profissional, educado e objetivo para uma agência parceira chamada "{partner_name}".

Solicitação: Temos uma situação de overbooking e precisamos transferir {passenger_count} passageiros para o veículo deles, se disponível.

Detalhes da Viagem: {trip_details}
Passageiros: {', '.join(passenger_names)}

O tom deve ser colaborativo e um pouco urgente, mas muito profissional.
Inclua espaços reservados para [Data] e [Seu Nome] se não estiver evidente.
Escreva o e-mail em Português do Brasil.
Retorne apenas o corpo do texto do e-mail.
""".strip()


def _extract_text(data: Any) -> str:
    """Text of the first candidate with any; "" for bodies of an unexpected shape."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list):
        return ""
    parts: List[str] = []
    for candidate in candidates:
        if not isinstance(candidate, dict):
            continue
        content = candidate.get("content")
        if not isinstance(content, dict):
            continue
        raw_parts = content.get("parts")
        for part in raw_parts if isinstance(raw_parts, list) else []:
            text = part.get("text") if isinstance(part, dict) else None
            if isinstance(text, str) and text:
                parts.append(text)
        if parts:
            break
    return "".join(parts).strip()


class GeminiEmailDrafter:
    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-2.5-flash",
        base_url: str = GEMINI_BASE_URL,
        timeout: float = 60.0,
        client: Optional[httpx.Client] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)

    def draft_partner_email(
        self,
        partner_name: str,
        passenger_count: int,
        trip_details: str,
        passenger_names: Sequence[str],
    ) -> str:
        if not self.api_key:
            _logger.warning("Gemini API key is missing; e-mail drafts are disabled")
            return MISSING_KEY_MESSAGE

        prompt = build_partner_prompt(partner_name, passenger_count, trip_details, passenger_names)
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}

        try:
            response = self._client.post(
                f"{self.base_url}/models/{self.model}:generateContent",
                json=payload,
                headers={"x-goog-api-key": self.api_key, "Content-Type": "application/json"},
            )
            response.raise_for_status()
            text = _extract_text(response.json())
        except (httpx.HTTPError, ValueError) as e:
            _logger.error("Gemini API error: %s", e)
            return FAILED_DRAFT_MESSAGE

        if not text:
            _logger.warning("Gemini returned an empty draft for partner=%s", partner_name)
            return EMPTY_DRAFT_MESSAGE
        return text
