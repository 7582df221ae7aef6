# ══════════════════════════════════════════════════════════════════════
# contratos/config.py — Constantes e configuração por ambiente
# ══════════════════════════════════════════════════════════════════════
"""
O nome da planilha de saída é fixo (não configurável) e é gravado no
diretório de trabalho do processo.

Variáveis de ambiente:
  CONTRATOS_CONTINUAR_EM_ERRO — "1"/"true" para marcar PDFs ilegíveis
                                na planilha em vez de abortar o lote.
"""

from __future__ import annotations

import os
from typing import Optional

from contratos.erros import ErroConfiguracao

ARQUIVO_SAIDA = "Contratos.xlsx"
NOME_ABA = "Contratos"
EXTENSAO_PDF = ".pdf"


def _get_env(chave: str, padrao: Optional[str] = None) -> Optional[str]:
    valor = os.getenv(chave)
    if valor is not None:
        valor = valor.strip()
        if valor == "":
            return padrao
        return valor
    return padrao


def _get_bool(chave: str, padrao: bool) -> bool:
    valor = _get_env(chave)
    if valor is None:
        return padrao
    valor_lower = valor.lower()
    if valor_lower in {"1", "true", "t", "yes", "y", "on", "sim", "s"}:
        return True
    if valor_lower in {"0", "false", "f", "no", "n", "off", "nao", "não"}:
        return False
    raise ErroConfiguracao(f"Variável de ambiente {chave} deve ser booleana (valor: {valor!r})")


def continuar_em_erro_padrao() -> bool:
    """Política de falha quando a CLI/interface não informa explicitamente."""
    return _get_bool("CONTRATOS_CONTINUAR_EM_ERRO", False)
