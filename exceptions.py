"""Ошибки протокола PSI на стороне получателя."""


class PSIError(Exception):
    """Базовая ошибка протокола"""


class DatasetError(PSIError):
    """Некорректный набор данных: не битовые строки или разная длина элементов"""


class ParameterError(PSIError):
    """Движок отверг набор параметров схемы"""


class ParameterMismatch(PSIError):
    """Параметры не совпадают с теми, под которыми сгенерированы ключи"""


class CapacityExceeded(PSIError):
    """Набор данных не помещается в слоты одного шифротекста"""

    def __init__(self, dataset_size, slot_count):
        self.dataset_size = dataset_size
        self.slot_count = slot_count
        super().__init__(
            f'dataset of {dataset_size} elements exceeds slot capacity {slot_count}'
        )


class PlaintextOverflow(PSIError):
    """Значение элемента не помещается в модуль открытого текста"""


class EngineFailure(PSIError):
    """Сбой движка гомоморфного шифрования (шифрование, расшифрование)"""


class KeyGenerationFailure(EngineFailure):
    """Сбой генерации ключей, сессия прерывается"""


class SlotAlignmentError(PSIError):
    """Расшифрованный вектор слотов короче набора данных"""


class UntrustworthyResult(PSIError):
    """Бюджет шума исчерпан, пересечение не гарантированно верно"""

    def __init__(self, noise_budget):
        self.noise_budget = noise_budget
        super().__init__(f'noise budget exhausted ({noise_budget} bits), result is unreliable')


class ResultAlreadyPopulated(PSIError):
    """Результат вычисления уже заполнен"""
