# ══════════════════════════════════════════════════════════════════════
# contratos/planilha.py — Geração da planilha Contratos.xlsx
# ══════════════════════════════════════════════════════════════════════
"""
Monta a planilha de saída a partir dos registros extraídos:

  linha 1        cabeçalho
  linhas 2..N+1  um contrato por linha, na ordem de processamento
  linha N+2      em branco
  linha N+3      "Duração total: M minutos e S.SS segundos"

A planilha é gerada em memória e gravada de uma vez só, para que um
lote abortado não deixe arquivo parcial no disco.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Sequence

import pandas as pd

from contratos.config import ARQUIVO_SAIDA, NOME_ABA
from contratos.modelos import RegistroContrato


# ══════════════════════════════════════════════════════════════════════
# COLUNAS
# ══════════════════════════════════════════════════════════════════════

COLUNAS = (
    ("Nome do Arquivo",          lambda r: r.nome_arquivo),
    ("Contratantes",             lambda r: "; ".join(r.contratantes)),
    ("Contratada",               lambda r: r.contratada),
    ("CNPJ Contratado",          lambda r: r.cnpj_contratada),
    ("Objeto do Contrato",       lambda r: r.objeto),
    ("Valor Global do Contrato", lambda r: r.valor_global),
    ("Vigência (Início)",        lambda r: r.vigencia_inicio),
    ("Vigência (Fim)",           lambda r: r.vigencia_fim),
    ("Gestor do Contrato",       lambda r: r.gestor),
)

# Só aparece quando algum PDF falhou no modo "continuar em erro"
COLUNA_ERRO = "Erro"


def formatar_duracao(segundos: float) -> str:
    """125.5 → 'Duração total: 2 minutos e 5.50 segundos'"""
    # Arredonda antes de dividir: 59.999 s vira 1 minuto, nunca "60.00 segundos"
    minutos, resto = divmod(round(segundos, 2), 60)
    return f"Duração total: {int(minutos)} minutos e {resto:.2f} segundos"


def montar_dataframe(registros: Sequence[RegistroContrato]) -> pd.DataFrame:
    """Um contrato por linha, com os cabeçalhos da planilha."""
    cabecalho = [titulo for titulo, _ in COLUNAS]
    linhas = [[obter(r) for _, obter in COLUNAS] for r in registros]

    if any(r.erro for r in registros):
        cabecalho.append(COLUNA_ERRO)
        for linha, r in zip(linhas, registros):
            linha.append(r.erro or "")

    return pd.DataFrame(linhas, columns=cabecalho)


# ══════════════════════════════════════════════════════════════════════
# GRAVAÇÃO
# ══════════════════════════════════════════════════════════════════════

def gerar_planilha_bytes(registros: Sequence[RegistroContrato],
                         duracao: float) -> bytes:
    """Renderiza a planilha em memória e devolve o conteúdo .xlsx."""
    df = montar_dataframe(registros)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=NOME_ABA, index=False)
        aba = writer.sheets[NOME_ABA]
        # Cabeçalho + N linhas de dados + 1 linha em branco
        aba.cell(row=len(df) + 3, column=1, value=formatar_duracao(duracao))
    return buffer.getvalue()


def gravar_planilha(registros: Sequence[RegistroContrato], duracao: float,
                    destino: str | Path = ARQUIVO_SAIDA) -> Path:
    conteudo = gerar_planilha_bytes(registros, duracao)
    caminho = Path(destino)
    caminho.write_bytes(conteudo)
    print(f"[PLANILHA] {len(registros)} contrato(s) gravado(s) em {caminho}")
    return caminho
