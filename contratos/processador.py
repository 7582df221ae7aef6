# ══════════════════════════════════════════════════════════════════════
# contratos/processador.py — Processamento em lote de uma pasta de PDFs
# ══════════════════════════════════════════════════════════════════════
"""
Percorre os PDFs de uma pasta, um por vez e na ordem da listagem,
extrai o texto (leitor_pdf), monta o registro de cada contrato
(extractor) e entrega a lista completa + duração à planilha.

Política de falha na leitura de um PDF:
  continuar_em_erro=False  aborta o lote inteiro; nenhuma planilha é gravada
  continuar_em_erro=True   o PDF vira um registro com o campo 'erro'
                           preenchido e o lote segue
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional

from contratos import extractor, leitor_pdf, planilha
from contratos.config import ARQUIVO_SAIDA, EXTENSAO_PDF
from contratos.erros import ErroLeituraDocumento
from contratos.modelos import RegistroContrato

Leitor = Callable[[bytes, str], str]


@dataclass
class ResultadoLote:
    registros: list[RegistroContrato] = field(default_factory=list)
    duracao: float = 0.0

    @property
    def falhas(self) -> list[RegistroContrato]:
        return [r for r in self.registros if r.erro]


# ══════════════════════════════════════════════════════════════════════
# LISTAGEM
# ══════════════════════════════════════════════════════════════════════

def listar_pdfs(pasta: str | Path) -> list[Path]:
    """PDFs da pasta (extensão sem diferenciar maiúsculas), em ordem."""
    pasta = Path(pasta)
    return [
        pasta / nome
        for nome in sorted(os.listdir(pasta))
        if os.path.splitext(nome)[1].lower() == EXTENSAO_PDF
        and (pasta / nome).is_file()
    ]


def _ler_arquivos(caminhos: Iterable[Path]) -> Iterator[tuple[str, bytes]]:
    for caminho in caminhos:
        yield caminho.name, caminho.read_bytes()


# ══════════════════════════════════════════════════════════════════════
# PROCESSAMENTO
# ══════════════════════════════════════════════════════════════════════

def processar_documentos(documentos: Iterable[tuple[str, bytes]],
                         leitor: Optional[Leitor] = None,
                         continuar_em_erro: bool = False) -> ResultadoLote:
    """
    Processa pares (nome_arquivo, bytes do PDF) sequencialmente e mede a
    duração total do lote.
    """
    if leitor is None:
        leitor = leitor_pdf.extrair_texto_pdf

    inicio = time.perf_counter()
    resultado = ResultadoLote()

    for nome, conteudo in documentos:
        try:
            texto = leitor(conteudo, nome)
        except ErroLeituraDocumento as e:
            if not continuar_em_erro:
                raise
            print(f"[LOTE] {nome}: ignorado ({e.motivo})")
            resultado.registros.append(RegistroContrato(nome_arquivo=nome, erro=e.motivo))
            continue

        registro = extractor.montar_registro(texto, nome)
        print(f"[CONTRATO] {nome}: {registro.campos_preenchidos()} de 7 campos extraídos")
        resultado.registros.append(registro)

    resultado.duracao = time.perf_counter() - inicio
    return resultado


def processar_pasta(pasta: str | Path, leitor: Optional[Leitor] = None,
                    continuar_em_erro: bool = False) -> ResultadoLote:
    caminhos = listar_pdfs(pasta)
    print(f"[LOTE] {len(caminhos)} PDF(s) encontrado(s) em {pasta}")
    return processar_documentos(
        _ler_arquivos(caminhos), leitor=leitor, continuar_em_erro=continuar_em_erro
    )


def executar(pasta: str | Path, continuar_em_erro: bool = False,
             destino: str | Path = ARQUIVO_SAIDA) -> Path:
    """Processa a pasta e grava a planilha. Devolve o caminho gravado."""
    resultado = processar_pasta(pasta, continuar_em_erro=continuar_em_erro)
    if resultado.falhas:
        print(f"[LOTE] {len(resultado.falhas)} PDF(s) não puderam ser lidos")
    return planilha.gravar_planilha(resultado.registros, resultado.duracao, destino)
