# ══════════════════════════════════════════════════════════════════════
# contratos/erros.py — Exceções do processamento em lote
# ══════════════════════════════════════════════════════════════════════
"""
Erros que interrompem (ou marcam) o processamento de contratos.

A ausência de um campo no texto NÃO é erro: cada extrator devolve o
valor vazio do campo. Só falhas de leitura do documento e de uso da
linha de comando chegam até aqui.
"""

from __future__ import annotations


class ErroContratos(Exception):
    """Base para os erros do extrator de contratos."""


class ErroUso(ErroContratos):
    """Pasta de entrada não informada na linha de comando."""


class ErroConfiguracao(ErroContratos):
    """Variável de ambiente com valor inválido."""


class ErroLeituraDocumento(ErroContratos):
    """O PDF não pôde ser aberto ou ter o texto extraído."""

    def __init__(self, nome_arquivo: str, motivo: str):
        self.nome_arquivo = nome_arquivo
        self.motivo = motivo
        super().__init__(f"{nome_arquivo}: {motivo}")
