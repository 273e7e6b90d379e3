"""
Данные сессии получателя: ключи, набор данных и результат вычисления.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Tuple

from exceptions import DatasetError, ResultAlreadyPopulated, UntrustworthyResult


@dataclass(frozen=True)
class DatasetElement:
    """Элемент набора: исходная битовая строка и её целочисленное представление"""
    bits: str
    value: int

    @classmethod
    def from_bits(cls, bits: str) -> 'DatasetElement':
        if not bits or set(bits) - {'0', '1'}:
            raise DatasetError(f'not a bit-string: {bits!r}')
        return cls(bits, int(bits, 2))


def check_fixed_width(elements) -> int:
    """Длина элементов в битах; все элементы должны быть одной длины"""
    if not elements:
        return 0
    width = len(elements[0].bits)
    for index, element in enumerate(elements):
        if len(element.bits) != width:
            raise DatasetError(
                f'element {index} has {len(element.bits)} bits, expected {width}'
            )
    return width


@dataclass(frozen=True)
class Receiver:
    """
    Контекст одной сессии PSI.

    Ключи генерируются один раз на сессию и принадлежат только получателю,
    поэтому в repr они не попадают. Все элементы набора имеют одинаковую
    длину в битах (element_bit_width).
    """
    secret_key: Any = field(repr=False)
    public_key: Any = field(repr=False)
    relin_keys: Any = field(repr=False)
    parameters: Any = None
    dataset: Tuple[DatasetElement, ...] = ()
    element_bit_width: int = 0

    def __post_init__(self):
        dataset = tuple(self.dataset)
        object.__setattr__(self, 'dataset', dataset)
        object.__setattr__(self, 'element_bit_width', check_fixed_width(dataset))

    def with_dataset(self, dataset) -> 'Receiver':
        """Новый получатель с теми же ключами и заданным набором"""
        return replace(self, dataset=tuple(dataset))

    def encoded_dataset(self):
        return [element.value for element in self.dataset]

    def __len__(self):
        return len(self.dataset)


class ComputationResult:
    """
    Пересечение наборов и оставшийся бюджет шума.

    Создаётся пустым, заполняется ровно один раз через populate(),
    после чего только читается.
    """

    def __init__(self):
        self._intersection: Tuple[str, ...] = ()
        self._noise_budget = 0
        self._populated = False

    def populate(self, intersection, noise_budget: int):
        if self._populated:
            raise ResultAlreadyPopulated('computation result is already populated')
        self._intersection = tuple(intersection)
        self._noise_budget = max(0, int(noise_budget))
        self._populated = True
        return self

    @property
    def intersection(self) -> Tuple[str, ...]:
        return self._intersection

    @property
    def noise_budget(self) -> int:
        return self._noise_budget

    @property
    def populated(self) -> bool:
        return self._populated

    @property
    def trustworthy(self) -> bool:
        # нулевой бюджет означает, что расшифрованные значения могут быть неверны
        return self._noise_budget > 0

    def require_trustworthy(self) -> 'ComputationResult':
        if not self.trustworthy:
            raise UntrustworthyResult(self._noise_budget)
        return self

    def __repr__(self):
        return (f'ComputationResult(intersection={list(self._intersection)!r}, '
                f'noise_budget={self._noise_budget})')

    def __eq__(self, other):
        if not isinstance(other, ComputationResult):
            return NotImplemented
        return (self._intersection, self._noise_budget) == (other._intersection, other._noise_budget)

    __hash__ = None


def empty_result() -> ComputationResult:
    """Результат для вырожденного входа: пустое пересечение, нулевой бюджет"""
    return ComputationResult().populate((), 0)
