"""Reply literals sent back to the chat.

Kept as data so a deployment can override any of them through the
``replies`` object of ``APP_CONFIG``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Replies(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    hello: str = "hello!"
    safada: str = "É você!"
    digest_header: str = "Resumo: \n\n"
    # Placeholders: {elapsed}, {text}
    digest_line: str = "[Há {elapsed}] {text}"
    missing_text: str = "Safado! Cadê a mensagem pra adicionar no resumo?"
    add_failed: str = "Ops! O código do Caio não funcionou :)"
    # Placeholder: {text}
    added: str = "Adicionado ao resumo: {text}"
