"""
Вспомогательные объекты тестов: детерминированный движок в памяти
и имитации отправителя.
"""
import numpy as np
from tenseal import sealapi

from he_engine import SchemeParameters
from receiver import DatasetElement

TEST_SECURITY_CONFIG = {
    'poly_modulus_degree': 8192,
    'plain_modulus_bits': 20,
    'security_level': 128,
}


def make_dataset(bitstrings):
    return tuple(DatasetElement.from_bits(bits) for bits in bitstrings)


class FakeCiphertext:
    def __init__(self, slots, noise_budget):
        self.slots = np.array(slots, dtype=np.uint64)
        self.noise_budget = noise_budget

    def size(self):
        return 2


class FakeEngine:
    """Движок без шифрования: шифротекст хранит вектор слотов и заданный бюджет шума"""

    def __init__(self, slot_count=16, noise_budget=40, plain_modulus=65537):
        self._slot_count = slot_count
        self._noise_budget = noise_budget
        self.plain_modulus = plain_modulus
        self.encoded = []

    def derive_parameters(self, security_config=None):
        return SchemeParameters(
            poly_modulus_degree=self._slot_count,
            plain_modulus=self.plain_modulus,
            security_level=128,
        )

    def generate_key_pair(self, params):
        return object(), object(), object()

    def slot_count(self, params):
        return self._slot_count

    def encode_batch(self, values, params):
        self.encoded.append(list(values))
        return np.array(values, dtype=np.uint64)

    def decode_batch(self, plain, params):
        return np.array(plain, dtype=np.uint64)

    def encrypt(self, plain, public_key, params):
        return FakeCiphertext(plain, self._noise_budget)

    def decrypt(self, ciphertext, secret_key, params):
        return ciphertext.slots

    def noise_budget(self, ciphertext, secret_key, params):
        return ciphertext.noise_budget

    def answer(self, slots, noise_budget=None):
        """Ответ отправителя с заданными значениями слотов"""
        padded = np.zeros(self._slot_count, dtype=np.uint64)
        padded[:len(slots)] = slots
        if noise_budget is None:
            noise_budget = self._noise_budget
        return FakeCiphertext(padded, noise_budget)


def reencrypting_sender(engine, params, slot_values):
    """
    Имитация отправителя: возвращает шифрование заданного вектора слотов
    под открытым ключом получателя.
    """
    def sender(receiver):
        def respond(ciphertext, relin_keys):
            slots = np.zeros(engine.slot_count(params), dtype=np.uint64)
            slots[:len(slot_values)] = slot_values
            plain = engine.encode_batch(slots.tolist(), params)
            return engine.encrypt(plain, receiver.public_key, params)
        return respond
    return sender


def subtracting_sender(engine, params, value):
    """Имитация отправителя с одним элементом: слот i = x_i - value"""
    def respond(ciphertext, relin_keys):
        plain = engine.encode_batch([value] * engine.slot_count(params), params)
        result = sealapi.Ciphertext(params.context)
        sealapi.Evaluator(params.context).sub_plain(ciphertext, plain, result)
        return result
    return respond
