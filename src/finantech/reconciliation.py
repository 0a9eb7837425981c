# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
Bank reconciliation: pairing bank-statement lines with ledger lines.

The matching decision is delegated to the generative-language API: both
lists are sent as JSON in a task prompt, together with a response schema,
and the model returns candidate pairs with a short justification. There is
no guaranteed recall or precision; the suggestions are reviewed by the user
and only then applied.

Local code is responsible for:
- selecting the lines to reconcile for a company (`unmatched_for_company`),
- sanitizing the model output (unknown ids and duplicates are dropped),
- applying accepted suggestions by setting `matched=True` on the ledger
  lines (`apply_matches`, `manual_match`).
"""

import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass, replace

from .ai_client import generate_content
from .config import AIConfig
from .errors import AIServiceError, ReconciliationError
from .models import BankAccount, BankTransaction, SystemTransaction

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "A IA não conseguiu processar a conciliação."

RESPONSE_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "bankTxId": {"type": "STRING"},
            "systemTxId": {"type": "STRING"},
            "reason": {"type": "STRING"},
        },
        "required": ["bankTxId", "systemTxId", "reason"],
    },
}

PROMPT_TEMPLATE = """
Você é um assistente de contabilidade especialista em conciliação bancária.
Sua tarefa é encontrar correspondências entre uma lista de transações de um
extrato bancário e uma lista de lançamentos de um sistema financeiro.

Critérios para correspondência:
1. O valor deve ser idêntico.
2. A data deve ser muito próxima (geralmente no mesmo dia ou com poucos dias de diferença).
3. A descrição deve ser semelhante (ex: "PAGTO ALUGUEL" no extrato e "Aluguel do Escritório" no sistema).

Analise as duas listas a seguir e retorne um array de objetos JSON com os
pares que você tem alta confiança que correspondem.

Lista de Transações do Extrato Bancário:
{bank_json}

Lista de Lançamentos do Sistema (não conciliados):
{system_json}

Retorne apenas os pares correspondentes no formato JSON especificado.
Não inclua lançamentos que não tenham um par claro.
"""


@dataclass(frozen=True)
class MatchSuggestion:
    """A suggested pair of bank line and ledger line."""

    bank_tx_id: str
    system_tx_id: str
    reason: str


def unmatched_for_company(
    company: str,
    bank_accounts: Iterable[BankAccount],
    bank_txs: Iterable[BankTransaction],
    system_txs: Iterable[SystemTransaction],
) -> tuple[list[BankTransaction], list[SystemTransaction]]:
    """
    Select the lines to reconcile for a company.

    Returns the bank lines of the company's bank accounts and the company's
    ledger lines that are not matched yet.
    """
    account_ids = {a.id for a in bank_accounts if a.company == company}
    bank = [tx for tx in bank_txs if tx.bank_account_id in account_ids]
    system = [tx for tx in system_txs if tx.company == company and not tx.matched]
    return bank, system


def build_prompt(
    bank_txs: Sequence[BankTransaction],
    system_txs: Sequence[SystemTransaction],
) -> str:
    bank_json = json.dumps([asdict(t) for t in bank_txs], ensure_ascii=False, indent=2)
    system_json = json.dumps(
        [asdict(t) for t in system_txs], ensure_ascii=False, indent=2
    )
    return PROMPT_TEMPLATE.format(bank_json=bank_json, system_json=system_json)


def parse_suggestions(
    text: str,
    bank_txs: Sequence[BankTransaction],
    system_txs: Sequence[SystemTransaction],
) -> list[MatchSuggestion]:
    """
    Decode the model answer into suggestions.

    Pairs referencing unknown ids are dropped, and each bank line and ledger
    line is used at most once (first suggestion wins).

    Raises
    ------
    ValueError
        If the text is not a JSON array of objects.
    """
    data = json.loads(text.strip())
    if not isinstance(data, list):
        raise ValueError("Expected a JSON array of suggestions.")

    bank_ids = {t.id for t in bank_txs}
    system_ids = {t.id for t in system_txs}
    used_bank: set[str] = set()
    used_system: set[str] = set()

    suggestions: list[MatchSuggestion] = []
    for item in data:
        if not isinstance(item, dict):
            raise ValueError("Expected JSON objects in the suggestions array.")
        bank_id = str(item.get("bankTxId", ""))
        system_id = str(item.get("systemTxId", ""))
        if bank_id not in bank_ids or system_id not in system_ids:
            logger.info("Dropping suggestion with unknown ids: %s / %s", bank_id, system_id)
            continue
        if bank_id in used_bank or system_id in used_system:
            continue
        used_bank.add(bank_id)
        used_system.add(system_id)
        suggestions.append(
            MatchSuggestion(
                bank_tx_id=bank_id,
                system_tx_id=system_id,
                reason=str(item.get("reason", "")),
            )
        )
    return suggestions


def suggest_matches(
    bank_txs: Sequence[BankTransaction],
    system_txs: Sequence[SystemTransaction],
    ai_config: AIConfig,
) -> list[MatchSuggestion]:
    """
    Ask the AI service for bank/ledger pairs.

    Raises
    ------
    ReconciliationError
        With a localized message when the service is unavailable or its
        answer cannot be decoded.
    """
    if not bank_txs or not system_txs:
        return []

    prompt = build_prompt(bank_txs, system_txs)
    try:
        text = generate_content(
            prompt,
            ai_config,
            temperature=0.1,
            response_schema=RESPONSE_SCHEMA,
        )
        suggestions = parse_suggestions(text, bank_txs, system_txs)
    except (AIServiceError, ValueError) as exc:
        logger.error("Error in AI reconciliation: %s", exc)
        raise ReconciliationError(FAILURE_MESSAGE) from exc

    logger.info("AI suggested %d reconciliation pair(s)", len(suggestions))
    return suggestions


def apply_matches(
    system_txs: Iterable[SystemTransaction],
    suggestions: Iterable[MatchSuggestion],
) -> list[SystemTransaction]:
    """Return a new list with the suggested ledger lines flagged as matched."""
    matched_ids = {s.system_tx_id for s in suggestions}
    return [
        replace(tx, matched=True) if tx.id in matched_ids else tx for tx in system_txs
    ]


def manual_match(
    system_txs: Iterable[SystemTransaction],
    system_tx_id: str,
) -> list[SystemTransaction]:
    """Flag a single ledger line as matched."""
    return [replace(tx, matched=True) if tx.id == system_tx_id else tx for tx in system_txs]
