"""
Textos sintéticos dos dois modelos de contrato conhecidos e utilitários
para montar pastas de PDFs "falsos" (o texto vai direto nos bytes e o
leitor de PDF é substituído nos testes de lote).
"""

from pathlib import Path

import pytest

from contratos import leitor_pdf

# Marca os arquivos cujo conteúdo já é o texto do contrato
PREFIXO_FALSO = b"%PDF-TEXTO\n"

# ── Modelo 1: CLÁUSULA 1. DAS PARTES + I.II – CONTRATADA ──
CONTRATO_MODELO_1 = """
CONTRATO DE PRESTAÇÃO DE SERVIÇOS Nº 059/2024

CLÁUSULA 1. DAS PARTES:
COMPANHIA DE SANEAMENTO DO ESTADO, sociedade de economia mista,
inscrita no CNPJ sob o nº 11.111.111/0001-11, com sede na Rua A;
I.II – CONTRATADA: ALFA ENGENHARIA LTDA, inscrita no CNPJ sob o
nº 12.345.678/0001-90, com sede na Rua B.

CLÁUSULA 2. DO OBJETO
Objeto:   Prestação de serviços de manutenção
preventiva e corretiva de redes.
Valor: R$ 1.234,56

Da vigência: I – Termo inicial: 15 de março de 2024; II – Termo final: 14 de março de 2025.

ANALISTA RESPONSÁVEL: Maria Souza - Gerência de Contratos
Subcontratada autorizada: 99.999.999/0001-99
"""

# ── Modelo 2: I.I – CONTRATANTES com várias empresas + preço por tabela ──
CONTRATO_MODELO_2 = """
CONTRATO Nº 123/2024
I.I – CONTRATANTES: BETA ENERGIA S.A., inscrita no CNPJ sob o nº 22.222.222/0001-22;
GAMA DISTRIBUIDORA S.A., inscrita no CNPJ sob o nº 33.333.333/0001-33,
representadas na forma de seus Estatutos Sociais;
I.II – CONTRATADA: DELTA SERVIÇOS LTDA, com sede em São Paulo,
CNPJ 44.444.444/0001-44.
CLÁUSULA 2ª. DO OBJETO
OBJETO: Fornecimento de materiais elétricos.
Preço: Conforme tabela LPU
CLÁUSULA 5. DA VIGÊNCIA
Os termos de vigência deste contrato são:
I.Termo inicial: 1 de janeiro de 2025. II.Termo final: 31 de dezembro de 2025.
ESPECIALISTA RESPONSÁVEL: João Pereira
"""

TEXTO_SEM_ROTULOS = (
    "Este documento é apenas um ofício de encaminhamento, "
    "sem nenhuma das informações procuradas."
)


@pytest.fixture
def leitor_falso(monkeypatch):
    """
    Substitui o leitor de PDF: arquivos com PREFIXO_FALSO têm o texto
    devolvido diretamente; os demais passam pelo pdfplumber de verdade.
    """
    leitor_real = leitor_pdf.extrair_texto_pdf

    def ler(conteudo, nome_arquivo="<memória>"):
        if conteudo.startswith(PREFIXO_FALSO):
            return conteudo[len(PREFIXO_FALSO):].decode("utf-8")
        return leitor_real(conteudo, nome_arquivo)

    monkeypatch.setattr(leitor_pdf, "extrair_texto_pdf", ler)
    return ler


def gravar_pdf_falso(pasta: Path, nome: str, texto: str) -> Path:
    caminho = pasta / nome
    caminho.write_bytes(PREFIXO_FALSO + texto.encode("utf-8"))
    return caminho


@pytest.fixture
def pasta_contratos(tmp_path):
    """Pasta com três contratos legíveis."""
    pasta = tmp_path / "contratos"
    pasta.mkdir()
    gravar_pdf_falso(pasta, "01_modelo1.pdf", CONTRATO_MODELO_1)
    gravar_pdf_falso(pasta, "02_modelo2.PDF", CONTRATO_MODELO_2)
    gravar_pdf_falso(pasta, "03_oficio.pdf", TEXTO_SEM_ROTULOS)
    (pasta / "leia-me.txt").write_text("não é contrato", encoding="utf-8")
    return pasta


@pytest.fixture
def pasta_com_pdf_corrompido(tmp_path):
    """Três PDFs, o segundo corrompido."""
    pasta = tmp_path / "contratos"
    pasta.mkdir()
    gravar_pdf_falso(pasta, "01_modelo1.pdf", CONTRATO_MODELO_1)
    (pasta / "02_corrompido.pdf").write_bytes(b"isto nao e um pdf")
    gravar_pdf_falso(pasta, "03_modelo2.pdf", CONTRATO_MODELO_2)
    return pasta
