# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
AI-generated advisory text (financial analysis, cost cutting, tax regimes).

Each function builds a Portuguese prompt from the company's data, sends it
to the generative-language API and returns the generated markdown text.

Unlike reconciliation, these features are purely informative: on any
failure (missing API key, transport error, unexpected payload) a static
localized message is returned instead of raising.
"""

import logging
from collections.abc import Sequence

from .ai_client import generate_content
from .config import AIConfig
from .errors import AIServiceError
from .models import Transaction
from .rollups import CashFlowMonth

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "Chave de API não configurada."
ANALYSIS_FALLBACK = (
    "Ocorreu um erro ao tentar analisar os dados. "
    "Por favor, tente novamente mais tarde."
)
COST_CUTTING_FALLBACK = "Ocorreu um erro ao buscar sugestões de corte de custos."
TAX_COMPARISON_FALLBACK = "Ocorreu um erro ao buscar a comparação de regimes tributários."


def _ask(prompt: str, ai_config: AIConfig, temperature: float, fallback: str) -> str:
    if not ai_config.api_key:
        return MISSING_KEY_MESSAGE
    try:
        return generate_content(prompt, ai_config, temperature=temperature)
    except AIServiceError as exc:
        logger.error("Error calling the AI service: %s", exc)
        return fallback


def financial_summary(
    cash_flow: Sequence[CashFlowMonth],
    receivables: Sequence[Transaction],
    payables: Sequence[Transaction],
) -> str:
    """Markdown summary of the cash flow and pending amounts, used as prompt context."""
    total_in = sum(m.receitas for m in cash_flow)
    total_out = sum(m.despesas for m in cash_flow)
    balance = cash_flow[-1].saldo if cash_flow else 0.0
    pending_in = sum(t.amount for t in receivables if t.status == "Pendente")
    pending_out = sum(t.amount for t in payables if t.status == "Pendente")

    lines = [
        f"## Resumo Financeiro da Empresa (últimos {len(cash_flow)} meses)",
        f"- Receita Total: R$ {total_in:.2f}",
        f"- Despesa Total: R$ {total_out:.2f}",
        f"- Saldo Atual: R$ {balance:.2f}",
        f"- Contas a Receber (Pendente): R$ {pending_in:.2f}",
        f"- Contas a Pagar (Pendente): R$ {pending_out:.2f}",
        "",
        "## Fluxo de Caixa Mensal",
    ]
    lines.extend(
        f"- {m.month}: Receita R$ {m.receitas:.2f}, "
        f"Despesa R$ {m.despesas:.2f}, Saldo R$ {m.saldo:.2f}"
        for m in cash_flow
    )
    return "\n".join(lines)


def financial_analysis(
    cash_flow: Sequence[CashFlowMonth],
    receivables: Sequence[Transaction],
    payables: Sequence[Transaction],
    ai_config: AIConfig,
) -> str:
    """Predictive cash-flow analysis for the next three months."""
    prompt = (
        "Você é um consultor financeiro especialista em análise de dados para "
        "pequenas e médias empresas.\n"
        "Com base no resumo financeiro a seguir, forneça uma análise preditiva "
        "do fluxo de caixa para os próximos 3 meses.\n"
        "Identifique tendências, pontos de atenção (riscos) e oportunidades de "
        "melhoria.\n"
        "Seja claro, objetivo e forneça recomendações práticas em formato de "
        "bullet points.\n\n"
        f"{financial_summary(cash_flow, receivables, payables)}\n"
    )
    return _ask(prompt, ai_config, 0.5, ANALYSIS_FALLBACK)


def cost_cutting_suggestions(
    payables: Sequence[Transaction],
    ai_config: AIConfig,
) -> str:
    """Categorized suggestions to reduce the listed expenses."""
    expenses = "\n".join(
        f"- {p.category}: {p.description} - R$ {p.amount:.2f}" for p in payables
    )
    prompt = (
        "Você é um especialista em otimização de custos. Com base na lista de "
        "despesas a seguir, sugira áreas onde a empresa pode cortar custos sem "
        "impactar negativamente a operação.\n"
        "Categorize suas sugestões (Ex: Negociar com fornecedores, Substituir "
        "ferramentas, etc.) e, se possível, estime o potencial de economia.\n\n"
        f"Lista de Despesas:\n{expenses}\n"
    )
    return _ask(prompt, ai_config, 0.7, COST_CUTTING_FALLBACK)


def tax_regime_comparison(
    monthly_revenue: float,
    business_activity: str,
    ai_config: AIConfig,
) -> str:
    """Comparison of Simples Nacional, Lucro Presumido and Lucro Real."""
    prompt = (
        "Você é um contador e consultor tributário brasileiro altamente "
        "qualificado, especialista em regimes de tributação para PMEs.\n\n"
        "Uma empresa com as seguintes características está buscando o regime "
        "tributário mais vantajoso:\n"
        f"- Faturamento Mensal Estimado: R$ {monthly_revenue:.2f}\n"
        f"- Atividade Principal: {business_activity or 'Não especificada'}\n\n"
        "Por favor, forneça uma análise comparativa detalhada entre os regimes: "
        "Simples Nacional, Lucro Presumido e Lucro Real.\n\n"
        "Sua análise deve incluir:\n"
        "1. Uma breve explicação de cada regime.\n"
        "2. Uma estimativa dos impostos a serem pagos em cada regime, com base "
        "no faturamento.\n"
        "3. Uma lista de prós e contras para cada regime, considerando o perfil "
        "da empresa.\n"
        "4. Uma recomendação final clara sobre qual regime parece ser o mais "
        "benéfico e por quê.\n\n"
        "Formate sua resposta usando markdown para clareza (títulos, listas, "
        "negrito).\n"
    )
    return _ask(prompt, ai_config, 0.6, TAX_COMPARISON_FALLBACK)
