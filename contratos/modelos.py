"""
Registro estruturado de um contrato, montado pelo extrator e consumido
apenas pela planilha de saída.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional


class Vigencia(NamedTuple):
    """Início e fim da vigência, ambos em dd/mm/aaaa."""
    inicio: str
    fim: str


@dataclass(frozen=True)
class RegistroContrato:
    nome_arquivo: str
    contratantes: tuple[str, ...] = ()
    contratada: str = ""
    cnpj_contratada: str = ""
    objeto: str = ""
    valor_global: str = ""
    vigencia: Optional[Vigencia] = None
    gestor: str = ""
    # Preenchido só no modo "continuar em erro", para PDFs ilegíveis
    erro: Optional[str] = None

    @property
    def vigencia_inicio(self) -> str:
        return self.vigencia.inicio if self.vigencia else ""

    @property
    def vigencia_fim(self) -> str:
        return self.vigencia.fim if self.vigencia else ""

    def campos_preenchidos(self) -> int:
        """Quantidade de campos extraídos com sucesso (para log)."""
        valores = [
            self.contratantes, self.contratada, self.cnpj_contratada,
            self.objeto, self.valor_global, self.vigencia, self.gestor,
        ]
        return sum(1 for v in valores if v)
