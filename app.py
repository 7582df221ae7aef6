import streamlit as st
import pandas as pd

from contratos import processador, planilha
from contratos.config import ARQUIVO_SAIDA, continuar_em_erro_padrao
from contratos.erros import ErroConfiguracao, ErroLeituraDocumento

# ── Configuração da página ──────────────────────────────────────────
st.set_page_config(
    page_title="Extração de Contratos",
    page_icon="📄",
    layout="wide"
)


def _processar_uploads(arquivos, continuar_em_erro: bool) -> processador.ResultadoLote:
    """Processa os PDFs enviados na ordem em que aparecem no uploader."""
    documentos = ((arq.name, arq.getvalue()) for arq in arquivos)
    return processador.processar_documentos(
        documentos, continuar_em_erro=continuar_em_erro
    )


# ── Sidebar ─────────────────────────────────────────────────────────
st.sidebar.markdown("### 📄 Extração de Contratos")
st.sidebar.divider()

pdf_files = st.sidebar.file_uploader(
    "Arraste os PDFs aqui ou clique para selecionar",
    type=["pdf"],
    accept_multiple_files=True,
)
try:
    _padrao_continuar = continuar_em_erro_padrao()
except ErroConfiguracao as e:
    st.sidebar.warning(f"⚠️ {e}. Usando o padrão (abortar o lote).")
    _padrao_continuar = False

continuar_em_erro = st.sidebar.toggle(
    "Continuar em caso de erro?", value=_padrao_continuar
)

st.sidebar.divider()
st.sidebar.caption("Campos: contratantes, contratada, CNPJ, objeto, valor, vigência e gestor")


# ══════════════════════════════════════════════════════════════════════
# ESTADO VAZIO
# ══════════════════════════════════════════════════════════════════════
if not pdf_files:
    st.info("Faça upload de um ou mais contratos (PDF) para iniciar a extração.")
    st.stop()


# ══════════════════════════════════════════════════════════════════════
# PROCESSAMENTO (roda apenas uma vez por conjunto de arquivos)
# ══════════════════════════════════════════════════════════════════════
_lote_id = (
    tuple(getattr(f, "file_id", f.name) for f in pdf_files),
    continuar_em_erro,
)
if st.session_state.get("lote_id") != _lote_id:
    try:
        with st.spinner(f"Processando {len(pdf_files)} PDF(s)..."):
            st.session_state.resultado_lote = _processar_uploads(pdf_files, continuar_em_erro)
        st.session_state.lote_id = _lote_id
    except ErroLeituraDocumento as e:
        st.session_state.pop("lote_id", None)
        st.session_state.pop("resultado_lote", None)
        st.error(
            f"❌ Não foi possível ler **{e.nome_arquivo}** ({e.motivo}). "
            "Lote abortado — ative *Continuar em caso de erro?* para "
            "processar os demais arquivos."
        )
        st.stop()

resultado = st.session_state.resultado_lote


# ══════════════════════════════════════════════════════════════════════
# RESULTADO
# ══════════════════════════════════════════════════════════════════════
st.markdown("### 📊 Contratos extraídos")

col1, col2, col3 = st.columns(3)
col1.metric("Contratos", len(resultado.registros))
col2.metric("Falhas de leitura", len(resultado.falhas))
col3.metric("Duração", f"{resultado.duracao:.2f} s")

df: pd.DataFrame = planilha.montar_dataframe(resultado.registros)
st.dataframe(df, width="stretch", hide_index=True)

if resultado.falhas:
    st.warning(
        "⚠️ Arquivos não lidos: "
        + ", ".join(r.nome_arquivo for r in resultado.falhas)
    )

st.caption(planilha.formatar_duracao(resultado.duracao))

st.download_button(
    label="⬇️ Baixar planilha",
    data=planilha.gerar_planilha_bytes(resultado.registros, resultado.duracao),
    file_name=ARQUIVO_SAIDA,
    mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    key="download_xlsx",
)
