"""
Módulo de extração de campos de contratos a partir do texto do PDF.

Cada campo (contratantes, contratada, CNPJ, objeto, valor global,
vigência e gestor) tem uma CASCATA de estratégias de regex, testadas em
ordem fixa de prioridade: a primeira que casar e produzir valor não
vazio vence. Existem pelo menos dois modelos de contrato em circulação
(cláusula "DAS PARTES" com subitens I.I/I.II e o modelo com rótulo
"CONTRATANTE:" direto), por isso um único padrão não basta.

Nenhum extrator levanta exceção quando o campo não é encontrado:
devolve o valor vazio do campo.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, NamedTuple, Optional, Union

from contratos.modelos import RegistroContrato, Vigencia


# ══════════════════════════════════════════════════════════════════════
# CONSTANTES E MAPEAMENTOS
# ══════════════════════════════════════════════════════════════════════

# Mapa de meses por extenso → número com dois dígitos
MESES_EXTENSO = MappingProxyType({
    "janeiro": "01", "fevereiro": "02", "março": "03", "abril": "04",
    "maio": "05", "junho": "06", "julho": "07", "agosto": "08",
    "setembro": "09", "outubro": "10", "novembro": "11", "dezembro": "12",
})

# Valor devolvido quando o preço segue a tabela de preços unitários
VALOR_TABELA_LPU = "Conforme tabela LPU"

_ESPACOS = re.compile(r"\s+")

_CNPJ = re.compile(r"\d{2}\.\d{3}\.\d{3}/\d{4}-\d{2}")

# ── Fragmentos de rótulos (tolerantes a espaço, traço e acento) ──
_TRACO = r"\s*[–—-]\s*"
_CLAUSULA_PARTES = r"CL[ÁA]USULA\s*1[ºª°]?\.\s*DAS\s+PARTES\s*:"
_ROTULO_CONTRATADA = r"I\.II\s*[–—-]?\s*CONTRATADA\s*:"
_ROTULO_CONTRATANTE = r"(?:I\.I\s*[–—-]?\s*)?CONTRATANTES?\s*:"
_FIM_CONTRATANTES = (
    r"(?=\s*(?:" + _ROTULO_CONTRATADA
    + r"|representadas\s*na\s*forma\s*de\s*seus\s*Estatutos\s*Sociais"
    + r"|denominada\s*simplesmente\s*CONTRATANTE))"
)

# "15 de março de 2024", "1º de janeiro de 2025"
_DATA_EXTENSO = (
    r"(\d{1,2}[º°]?\s+de\s+(?:" + "|".join(MESES_EXTENSO) + r")\s+de\s+\d{4})"
)


# ══════════════════════════════════════════════════════════════════════
# NORMALIZAÇÃO DE TEXTO
# ══════════════════════════════════════════════════════════════════════

class TextoContrato(NamedTuple):
    """
    Duas visões do mesmo texto, calculadas uma única vez por documento:
    - normalizado: todo espaço em branco (inclusive quebras) vira um espaço
    - linhas: espaços colapsados dentro de cada linha, quebras preservadas
    """
    normalizado: str
    linhas: str


def limpar_texto(texto: str, preservar_linhas: bool = False) -> str:
    """
    Colapsa sequências de espaço em branco em um único espaço e apara
    as pontas. Com preservar_linhas=True o colapso é feito linha a linha
    e linhas vazias são descartadas. Idempotente nos dois modos.
    """
    if not texto:
        return ""
    if not preservar_linhas:
        return _ESPACOS.sub(" ", texto).strip()
    linhas = (_ESPACOS.sub(" ", linha).strip() for linha in texto.splitlines())
    return "\n".join(linha for linha in linhas if linha)


def preparar_texto(bruto: str) -> TextoContrato:
    return TextoContrato(
        normalizado=limpar_texto(bruto),
        linhas=limpar_texto(bruto, preservar_linhas=True),
    )


def _como_texto(texto: Union[str, TextoContrato]) -> TextoContrato:
    if isinstance(texto, TextoContrato):
        return texto
    return preparar_texto(texto)


# ══════════════════════════════════════════════════════════════════════
# FORMATAÇÃO DE DATA
# ══════════════════════════════════════════════════════════════════════

def formatar_data(data: str) -> str:
    """
    Converte "15 de março de 2024" → "15/03/2024".

    Não valida a entrada: só deve receber texto que casou com um dos
    padrões de vigência (que já garantem o formato dia/de/mês/de/ano).
    """
    partes = data.lower().split()
    dia = partes[0].rstrip("º°").zfill(2)
    mes = MESES_EXTENSO[partes[2]]
    ano = partes[4]
    return f"{dia}/{mes}/{ano}"


# ══════════════════════════════════════════════════════════════════════
# CASCATA DE ESTRATÉGIAS
# ══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Estrategia:
    """Uma tentativa de extração: devolve o valor ou None."""
    nome: str
    aplicar: Callable[[TextoContrato], Optional[object]]


class Captura(NamedTuple):
    valor: object
    estrategia: str


@dataclass(frozen=True)
class Cascata:
    """
    Lista ordenada de estratégias para um campo. A primeira estratégia
    que devolver valor não vazio vence; as seguintes não são executadas.
    """
    campo: str
    estrategias: tuple[Estrategia, ...]
    vazio: object = ""

    def tentar(self, texto: Union[str, TextoContrato]) -> Optional[Captura]:
        texto = _como_texto(texto)
        for estrategia in self.estrategias:
            valor = estrategia.aplicar(texto)
            if valor:
                return Captura(valor, estrategia.nome)
        return None

    def extrair(self, texto: Union[str, TextoContrato]):
        captura = self.tentar(texto)
        return captura.valor if captura else self.vazio


def _antes_da_virgula(trecho: str) -> str:
    return trecho.strip().split(",")[0].strip()


# ══════════════════════════════════════════════════════════════════════
# CONTRATANTES
# ══════════════════════════════════════════════════════════════════════

_RE_PARTES_BLOCO = re.compile(
    _CLAUSULA_PARTES + r"\s*(.*?)(?=" + _ROTULO_CONTRATADA + r")", re.DOTALL
)
_RE_CONTRATANTES_ROTULO = re.compile(
    _ROTULO_CONTRATANTE + r"\s*(.+?)" + _FIM_CONTRATANTES, re.DOTALL
)
_RE_PREFIXO_CONTRATANTE = re.compile(r"^" + _ROTULO_CONTRATANTE + r"\s*")
_RE_PARTES_DIRETO = re.compile(_CLAUSULA_PARTES + r"\s*([^,]+),")


def _contratantes_clausula_partes(texto: TextoContrato) -> Optional[tuple[str, ...]]:
    """Modelo 1: 'CLÁUSULA 1. DAS PARTES: NOME, ... I.II – CONTRATADA:'."""
    m = _RE_PARTES_BLOCO.search(texto.normalizado)
    if not m:
        return None
    nome = _RE_PREFIXO_CONTRATANTE.sub("", _antes_da_virgula(m.group(1))).strip()
    return (nome,) if nome else None


def _contratantes_rotulo(texto: TextoContrato) -> Optional[tuple[str, ...]]:
    """
    Modelo 2: 'I.I – CONTRATANTES: EMPRESA A, ...; EMPRESA B, ...'
    até 'I.II – CONTRATADA:' ou frases de fechamento do preâmbulo.
    Cada entrada separada por ';' contribui com o trecho antes da vírgula.
    """
    m = _RE_CONTRATANTES_ROTULO.search(texto.normalizado)
    if not m:
        return None
    nomes = []
    for entrada in m.group(1).split(";"):
        nome = _RE_PREFIXO_CONTRATANTE.sub("", _antes_da_virgula(entrada)).strip()
        if nome:
            nomes.append(nome)
    return tuple(nomes) or None


def _contratantes_partes_direto(texto: TextoContrato) -> Optional[tuple[str, ...]]:
    """Cláusula DAS PARTES sem subitem I.I: nome até a primeira vírgula."""
    m = _RE_PARTES_DIRETO.search(texto.normalizado)
    if not m:
        return None
    nome = m.group(1).strip()
    return (nome,) if nome else None


def _contratantes_por_linha(texto: TextoContrato) -> Optional[tuple[str, ...]]:
    """Bloco DAS PARTES quebrado em linhas: um nome por linha."""
    m = _RE_PARTES_BLOCO.search(texto.linhas)
    if not m:
        return None
    nomes = [_antes_da_virgula(linha) for linha in m.group(1).split("\n")]
    return tuple(n for n in nomes if n) or None


CASCATA_CONTRATANTES = Cascata(
    campo="contratantes",
    estrategias=(
        Estrategia("clausula_partes", _contratantes_clausula_partes),
        Estrategia("rotulo_contratante", _contratantes_rotulo),
        Estrategia("clausula_partes_direto", _contratantes_partes_direto),
        Estrategia("clausula_partes_linhas", _contratantes_por_linha),
        # Último recurso: mesmo padrão da terceira tentativa
        Estrategia("fallback", _contratantes_partes_direto),
    ),
    vazio=(),
)


# ══════════════════════════════════════════════════════════════════════
# CONTRATADA E CNPJ
# ══════════════════════════════════════════════════════════════════════

_RE_CONTRATADA = re.compile(_ROTULO_CONTRATADA + r"\s*([^,]+),")
_RE_SECAO_CONTRATADA = re.compile(
    _ROTULO_CONTRATADA + r".*?(?=CL[ÁA]USULA\s*2[ºª°]?\.\s*DO\s+OBJETO)",
    re.DOTALL
)


def _contratada_rotulo(texto: TextoContrato) -> Optional[str]:
    m = _RE_CONTRATADA.search(texto.normalizado)
    return m.group(1).strip() if m else None


def _cnpj_secao_contratada(texto: TextoContrato) -> Optional[str]:
    """
    Procura o CNPJ apenas entre 'I.II – CONTRATADA:' e a cláusula do
    objeto; CNPJs de outras empresas citadas depois são ignorados.
    """
    secao = _RE_SECAO_CONTRATADA.search(texto.normalizado)
    if not secao:
        return None
    m = _CNPJ.search(secao.group(0))
    return m.group(0) if m else None


CASCATA_CONTRATADA = Cascata(
    campo="contratada",
    estrategias=(Estrategia("rotulo_contratada", _contratada_rotulo),),
)

CASCATA_CNPJ = Cascata(
    campo="cnpj_contratada",
    estrategias=(Estrategia("secao_contratada", _cnpj_secao_contratada),),
)


# ══════════════════════════════════════════════════════════════════════
# OBJETO E VALOR GLOBAL
# ══════════════════════════════════════════════════════════════════════

_RE_OBJETO = re.compile(r"(?:Objeto|OBJETO)\s*:\s*(.*?)\s*(?:Valor|Pre[çc]o)", re.DOTALL)
_RE_VALOR = re.compile(
    r"Valor(?:\s+Total\s+Estimado)?\s*:?\s*R\$\s*([\d.,]+)", re.IGNORECASE
)
_RE_TABELA_LPU = re.compile(r"Pre[çc]o\s*:\s*Conforme\s+tabela\s+LPU", re.IGNORECASE)


def _objeto_rotulo(texto: TextoContrato) -> Optional[str]:
    m = _RE_OBJETO.search(texto.normalizado)
    return limpar_texto(m.group(1)) if m else None


def _valor_em_reais(texto: TextoContrato) -> Optional[str]:
    m = _RE_VALOR.search(texto.normalizado)
    if not m:
        return None
    # "R$ 1.234,56." no fim da frase: o ponto final não faz parte do valor
    return m.group(1).rstrip(".,")


def _valor_tabela_lpu(texto: TextoContrato) -> Optional[str]:
    return VALOR_TABELA_LPU if _RE_TABELA_LPU.search(texto.normalizado) else None


CASCATA_OBJETO = Cascata(
    campo="objeto",
    estrategias=(Estrategia("rotulo_objeto", _objeto_rotulo),),
)

CASCATA_VALOR = Cascata(
    campo="valor_global",
    estrategias=(
        Estrategia("valor_reais", _valor_em_reais),
        Estrategia("tabela_lpu", _valor_tabela_lpu),
    ),
)


# ══════════════════════════════════════════════════════════════════════
# VIGÊNCIA
# ══════════════════════════════════════════════════════════════════════

# Modelo antigo: "Da vigência: I – Termo inicial: ...; II – Termo final: ..."
_RE_VIGENCIA_TRACO = re.compile(
    r"Da\s*vig[êe]ncia\s*:\s*I" + _TRACO + r"Termo\s*inicial\s*:\s*" + _DATA_EXTENSO
    + r"\s*;?\s*II" + _TRACO + r"Termo\s*final\s*:\s*" + _DATA_EXTENSO,
    re.IGNORECASE
)

# Modelo novo: "CLÁUSULA 7. DA VIGÊNCIA ... termos de vigência ... I.Termo inicial: ..."
_RE_VIGENCIA_CLAUSULA = re.compile(
    r"CL[ÁA]USULA\s*\d+[ºª°]?\.\s*DA\s*VIG[ÊE]NCIA.*?termos?\s*(?:de\s*)?vig[êe]ncia"
    r".*?I\.\s*Termo\s*inicial\s*:\s*" + _DATA_EXTENSO
    + r"\s*\.\s*II\.\s*Termo\s*final\s*:\s*" + _DATA_EXTENSO + r"\s*\.",
    re.IGNORECASE | re.DOTALL
)

# "Da vigência: I.Termo inicial: ... . II.Termo final: ... ."
_RE_VIGENCIA_PONTO = re.compile(
    r"Da\s*vig[êe]ncia\s*:\s*I\.\s*Termo\s*inicial\s*:\s*" + _DATA_EXTENSO
    + r"\s*\.\s*II\.\s*Termo\s*final\s*:\s*" + _DATA_EXTENSO + r"\s*\.",
    re.IGNORECASE
)


def _vigencia_por(regex: re.Pattern) -> Callable[[TextoContrato], Optional[Vigencia]]:
    def aplicar(texto: TextoContrato) -> Optional[Vigencia]:
        m = regex.search(texto.normalizado)
        if not m:
            return None
        # Os dois termos vêm do mesmo match: nunca um sem o outro
        return Vigencia(
            inicio=formatar_data(m.group(1).strip()),
            fim=formatar_data(m.group(2).strip()),
        )
    return aplicar


CASCATA_VIGENCIA = Cascata(
    campo="vigencia",
    estrategias=(
        Estrategia("da_vigencia_traco", _vigencia_por(_RE_VIGENCIA_TRACO)),
        Estrategia("clausula_vigencia", _vigencia_por(_RE_VIGENCIA_CLAUSULA)),
        Estrategia("da_vigencia_ponto", _vigencia_por(_RE_VIGENCIA_PONTO)),
    ),
    vazio=None,
)


# ══════════════════════════════════════════════════════════════════════
# GESTOR DO CONTRATO
# ══════════════════════════════════════════════════════════════════════

_ROTULO_GESTOR = r"(?:ESPECIALISTA|ANALISTA)\s*RESPONS[ÁA]VEL\s*:\s*"
_RE_GESTOR = re.compile(_ROTULO_GESTOR + r"([^\n]+)")

# Texto que já chegou sem quebras de linha: o valor vai até o próximo
# rótulo ("Palavra:" ou "Palavra palavra:"), a próxima cláusula ou o fim
_RE_GESTOR_LINHA_UNICA = re.compile(
    _ROTULO_GESTOR
    + r"(.+?)(?=\s+(?:CL[ÁA]USULA\b|[A-ZÀ-Ý]\w*(?:\s+\w+)?\s*:)|$)"
)


def _gestor_responsavel(texto: TextoContrato) -> Optional[str]:
    # Usa a visão com quebras de linha: o valor é o restante da linha
    regex = _RE_GESTOR if "\n" in texto.linhas else _RE_GESTOR_LINHA_UNICA
    m = regex.search(texto.linhas)
    return m.group(1).strip() if m else None


CASCATA_GESTOR = Cascata(
    campo="gestor",
    estrategias=(Estrategia("responsavel", _gestor_responsavel),),
)


# ══════════════════════════════════════════════════════════════════════
# FUNÇÕES PÚBLICAS POR CAMPO
# ══════════════════════════════════════════════════════════════════════

def extrair_contratantes(texto: Union[str, TextoContrato]) -> tuple[str, ...]:
    return CASCATA_CONTRATANTES.extrair(texto)


def extrair_contratada(texto: Union[str, TextoContrato]) -> str:
    return CASCATA_CONTRATADA.extrair(texto)


def extrair_cnpj_contratada(texto: Union[str, TextoContrato]) -> str:
    return CASCATA_CNPJ.extrair(texto)


def extrair_objeto(texto: Union[str, TextoContrato]) -> str:
    return CASCATA_OBJETO.extrair(texto)


def extrair_valor_global(texto: Union[str, TextoContrato]) -> str:
    return CASCATA_VALOR.extrair(texto)


def extrair_vigencia(texto: Union[str, TextoContrato]) -> Optional[Vigencia]:
    return CASCATA_VIGENCIA.extrair(texto)


def extrair_gestor(texto: Union[str, TextoContrato]) -> str:
    return CASCATA_GESTOR.extrair(texto)


# ══════════════════════════════════════════════════════════════════════
# FUNÇÃO PRINCIPAL
# ══════════════════════════════════════════════════════════════════════

def montar_registro(texto: str, nome_arquivo: str) -> RegistroContrato:
    """
    Recebe o texto de um contrato e o nome do arquivo de origem e
    devolve o registro com os sete campos. Cada cascata roda uma única
    vez; campos não encontrados ficam com o valor vazio.
    """
    texto_prep = preparar_texto(texto)
    return RegistroContrato(
        nome_arquivo=nome_arquivo,
        contratantes=extrair_contratantes(texto_prep),
        contratada=extrair_contratada(texto_prep),
        cnpj_contratada=extrair_cnpj_contratada(texto_prep),
        objeto=extrair_objeto(texto_prep),
        valor_global=extrair_valor_global(texto_prep),
        vigencia=extrair_vigencia(texto_prep),
        gestor=extrair_gestor(texto_prep),
    )
