# src/atlas_flowplan/core/estimation/registry.py
"""
Registro ordenado de estimadores de reducers.

Este módulo define o `EstimatorRegistry` e a tabela de factories que
resolve identificadores declarados na configuração
(`reducer_estimation.estimators`) em instâncias de estimadores.

Em vez de carregar classes pelo nome em runtime, cada identificador
estável é associado explicitamente a uma factory. Uma factory recebe o
`bytes_per_reducer` resolvido e devolve um `ReducerEstimator`.

Responsabilidades do módulo:
    - Validar `bytes_per_reducer` e `default_reducers` na construção
    - Resolver identificadores em estimadores, em ordem de registro
    - Rejeitar identificadores desconhecidos e ids duplicados

Decisões arquiteturais:
    - Toda validação ocorre em `build_registry`, nunca adiada para a
      estimativa por estágio
    - A ordem de registro é a ordem de avaliação (primeiro acerto vence)
    - Um registry construído é congelado: durante o planejamento ele é
      configuração compartilhada somente leitura

Limites explícitos:
    - Não decide número de reducers (responsabilidade de `planner`)
    - Não carrega arquivos de configuração
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from atlas_flowplan.core.config.keys import (
    BYTES_PER_REDUCER_KEY,
    DEFAULT_BYTES_PER_REDUCER,
    DEFAULT_REDUCERS_KEY,
    ESTIMATORS_KEY,
    get_setting,
)
from atlas_flowplan.core.exceptions import (
    ConfigurationError,
    DuplicateEstimatorIdError,
    UnknownEstimatorError,
)

from .estimator import InputSizeReducerEstimator, ReducerEstimator, coerce_positive_int

EstimatorFactory = Callable[[int], ReducerEstimator]

ESTIMATOR_FACTORIES: Dict[str, EstimatorFactory] = {
    InputSizeReducerEstimator.id: lambda bytes_per_reducer: InputSizeReducerEstimator(
        bytes_per_reducer=bytes_per_reducer
    ),
}


def register_estimator_factory(
    identifier: str,
    factory: EstimatorFactory,
    *,
    factories: Optional[Dict[str, EstimatorFactory]] = None,
    replace: bool = False,
) -> None:
    """
    Associa `identifier` a `factory` na tabela informada (default: global).

    Raises:
        ValueError: Se `identifier` for vazio ou `factory` não for chamável.
        ConfigurationError: Se o identificador já existir e `replace=False`.
    """
    table = ESTIMATOR_FACTORIES if factories is None else factories

    if not isinstance(identifier, str) or not identifier.strip():
        raise ValueError("estimator identifier must be a non-empty string")
    if not callable(factory):
        raise ValueError("estimator factory must be callable")
    if identifier in table and not replace:
        raise ConfigurationError(
            message=f"Estimator factory already registered: {identifier}",
            details={"identifier": identifier},
        )

    table[identifier] = factory


@dataclass
class EstimatorRegistry:
    """
    Cadeia ordenada de estimadores e parâmetros de estimativa.

    Campos:
        - bytes_per_reducer: volume alvo por reducer (> 0)
        - default_reducers: contagem usada quando nenhum estimador opina (> 0)

    Invariantes:
        - Cada estimador registrado possui `id` único
        - `list()` reflete exatamente a ordem de registro
        - Após `freeze()`, nenhum estimador pode ser adicionado
    """

    bytes_per_reducer: int = DEFAULT_BYTES_PER_REDUCER
    default_reducers: int = 1

    _estimators: Dict[str, ReducerEstimator] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)
    _frozen: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.bytes_per_reducer = coerce_positive_int(self.bytes_per_reducer, key=BYTES_PER_REDUCER_KEY)
        self.default_reducers = coerce_positive_int(self.default_reducers, key=DEFAULT_REDUCERS_KEY)

    def add(self, estimator: ReducerEstimator) -> None:
        if self._frozen:
            raise ConfigurationError(
                message="Estimator registry is frozen",
                details={"estimators": list(self._order)},
            )

        if not isinstance(estimator, ReducerEstimator):
            raise ConfigurationError(
                message="Object does not implement ReducerEstimator",
                details={"received": type(estimator).__name__},
            )

        estimator_id = getattr(estimator, "id", None)
        if not isinstance(estimator_id, str) or not estimator_id.strip():
            raise ValueError("estimator.id must be a non-empty string")

        if estimator_id in self._estimators:
            raise DuplicateEstimatorIdError(
                message=f"Duplicate estimator id: {estimator_id}",
                details={"estimator_id": estimator_id},
            )

        self._estimators[estimator_id] = estimator
        self._order.append(estimator_id)

    def get(self, estimator_id: str) -> ReducerEstimator:
        return self._estimators[estimator_id]

    def list(self) -> List[ReducerEstimator]:
        return [self._estimators[eid] for eid in self._order]

    @property
    def estimators(self) -> Tuple[ReducerEstimator, ...]:
        return tuple(self.list())

    def freeze(self) -> "EstimatorRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._order)


def _estimator_ids(config: Optional[Dict[str, Any]]) -> List[str]:
    raw = get_setting(config, ESTIMATORS_KEY, [])

    # formato plano chave-valor: "input_size,history"
    if isinstance(raw, str):
        raw = [part.strip() for part in raw.split(",") if part.strip()]

    if not isinstance(raw, (list, tuple)):
        raise ConfigurationError(
            message=f"'{ESTIMATORS_KEY}' must be a list of estimator identifiers",
            details={"key": ESTIMATORS_KEY, "received": type(raw).__name__},
        )

    for identifier in raw:
        if not isinstance(identifier, str) or not identifier.strip():
            raise ConfigurationError(
                message="Estimator identifier must be a non-empty string",
                details={"key": ESTIMATORS_KEY, "value": repr(identifier)},
            )
    return list(raw)


def build_registry(
    config: Optional[Dict[str, Any]],
    *,
    factories: Optional[Dict[str, EstimatorFactory]] = None,
) -> EstimatorRegistry:
    """
    Constrói e congela o registry descrito pela configuração.

    Args:
        config: Configuração efetiva (pode ser None = só defaults).
        factories: Tabela identificador → factory (default: global).

    Returns:
        EstimatorRegistry: registry congelado, pronto para planejamento.

    Raises:
        ConfigurationError: `bytes_per_reducer`/`default_reducers` não
            positivos ou não inteiros, lista de estimadores inválida.
        UnknownEstimatorError: Identificador sem factory registrada.
        DuplicateEstimatorIdError: Dois estimadores com o mesmo `id`.
    """
    table = ESTIMATOR_FACTORIES if factories is None else factories

    registry = EstimatorRegistry(
        bytes_per_reducer=get_setting(config, BYTES_PER_REDUCER_KEY, DEFAULT_BYTES_PER_REDUCER),
        default_reducers=get_setting(config, DEFAULT_REDUCERS_KEY, 1),
    )

    for identifier in _estimator_ids(config):
        factory = table.get(identifier)
        if factory is None:
            raise UnknownEstimatorError(
                message=f"Unknown reducer estimator: {identifier}",
                details={"identifier": identifier, "known": sorted(table)},
                hint="Registre a factory com register_estimator_factory ou corrija reducer_estimation.estimators.",
            )
        registry.add(factory(registry.bytes_per_reducer))

    return registry.freeze()
