"""
Leitura do texto de contratos em PDF com pdfplumber.

Não há OCR: páginas em imagem simplesmente não contribuem com texto.
Qualquer falha ao abrir/ler o PDF vira ErroLeituraDocumento.
"""

from __future__ import annotations

import io

import pdfplumber

from contratos.erros import ErroLeituraDocumento


def extrair_texto_pdf(conteudo: bytes, nome_arquivo: str = "<memória>") -> str:
    """
    Recebe os bytes de um PDF e devolve o texto de todas as páginas,
    separadas por linha em branco.
    """
    textos = []
    try:
        with pdfplumber.open(io.BytesIO(conteudo)) as pdf:
            for pagina in pdf.pages:
                texto = pagina.extract_text() or ""
                textos.append(texto.strip())
            total_paginas = len(pdf.pages)
    except Exception as e:
        raise ErroLeituraDocumento(nome_arquivo, str(e) or type(e).__name__) from e

    paginas_vazias = sum(1 for t in textos if not t)
    if paginas_vazias:
        print(f"[PDF] {nome_arquivo}: {paginas_vazias} de {total_paginas} "
              "página(s) sem texto extraível")

    return "\n\n".join(textos)
