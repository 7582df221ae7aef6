"""Linha de comando: contratos <pasta> [--continuar-em-erro]."""

from __future__ import annotations

from typing import Optional

import typer

from contratos import processador
from contratos.config import ARQUIVO_SAIDA, continuar_em_erro_padrao
from contratos.erros import ErroConfiguracao, ErroContratos, ErroUso

app = typer.Typer(add_completion=False, help="Extrai dados de contratos em PDF para Contratos.xlsx")


@app.command()
def extrair(
    pasta: Optional[str] = typer.Argument(
        None, help="Pasta com os arquivos PDF dos contratos",
    ),
    continuar_em_erro: bool = typer.Option(
        False,
        "--continuar-em-erro",
        help="Marcar PDFs ilegíveis na planilha em vez de abortar o lote",
    ),
) -> None:
    try:
        if not pasta:
            raise ErroUso("Por favor, forneça o caminho para a pasta com os arquivos PDF.")
        continuar_em_erro = continuar_em_erro or continuar_em_erro_padrao()
        processador.executar(pasta, continuar_em_erro=continuar_em_erro)
    except (ErroUso, ErroConfiguracao) as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    except (ErroContratos, OSError) as e:
        typer.echo(f"Erro ao processar os arquivos PDF: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Processamento concluído. O arquivo {ARQUIVO_SAIDA} foi criado.")


def main():
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
