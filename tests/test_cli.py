from typer.testing import CliRunner

from contratos import cli
from contratos.config import ARQUIVO_SAIDA

runner = CliRunner()


def test_sem_pasta_sai_com_codigo_1(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(cli.app, [])

    assert result.exit_code == 1
    assert "Por favor, forneça o caminho para a pasta com os arquivos PDF." in result.output
    assert not (tmp_path / ARQUIVO_SAIDA).exists()


def test_processa_pasta_e_cria_planilha_no_diretorio_atual(pasta_contratos, leitor_falso,
                                                           tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(cli.app, [str(pasta_contratos)])

    assert result.exit_code == 0, result.output
    assert "Processamento concluído. O arquivo Contratos.xlsx foi criado." in result.output
    assert (tmp_path / ARQUIVO_SAIDA).exists()


def test_pdf_corrompido_sai_com_erro_e_sem_planilha(pasta_com_pdf_corrompido, leitor_falso,
                                                    tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CONTRATOS_CONTINUAR_EM_ERRO", raising=False)

    result = runner.invoke(cli.app, [str(pasta_com_pdf_corrompido)])

    assert result.exit_code == 1
    assert "Erro ao processar os arquivos PDF" in result.output
    assert "02_corrompido.pdf" in result.output
    assert "[ERRO]" not in result.output
    linhas_de_erro = [linha for linha in result.output.splitlines() if "Erro" in linha]
    assert len(linhas_de_erro) == 1
    assert linhas_de_erro[0].startswith("Erro ao processar os arquivos PDF: 02_corrompido.pdf: ")
    assert not (tmp_path / ARQUIVO_SAIDA).exists()


def test_continuar_em_erro_pela_opcao(pasta_com_pdf_corrompido, leitor_falso,
                                      tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(cli.app, [str(pasta_com_pdf_corrompido), "--continuar-em-erro"])

    assert result.exit_code == 0, result.output
    assert (tmp_path / ARQUIVO_SAIDA).exists()


def test_continuar_em_erro_pelo_ambiente(pasta_com_pdf_corrompido, leitor_falso,
                                         tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CONTRATOS_CONTINUAR_EM_ERRO", "sim")

    result = runner.invoke(cli.app, [str(pasta_com_pdf_corrompido)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / ARQUIVO_SAIDA).exists()


def test_pasta_inexistente(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(cli.app, [str(tmp_path / "nao-existe")])

    assert result.exit_code == 1
    assert "Erro ao processar os arquivos PDF" in result.output


def test_variavel_de_ambiente_invalida_sai_com_codigo_1(pasta_contratos, leitor_falso,
                                                        tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CONTRATOS_CONTINUAR_EM_ERRO", "talvez")

    result = runner.invoke(cli.app, [str(pasta_contratos)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "CONTRATOS_CONTINUAR_EM_ERRO deve ser booleana" in result.output
    assert not (tmp_path / ARQUIVO_SAIDA).exists()


def test_opcao_explicita_dispensa_a_variavel_de_ambiente(pasta_contratos, leitor_falso,
                                                        tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CONTRATOS_CONTINUAR_EM_ERRO", "talvez")

    result = runner.invoke(cli.app, [str(pasta_contratos), "--continuar-em-erro"])

    assert result.exit_code == 0, result.output
