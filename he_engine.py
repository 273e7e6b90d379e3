"""
Обёртка над низкоуровневым API SEAL из TenSEAL (tenseal.sealapi).

Получателю нужны операции, которых нет у высокоуровневых векторов TenSEAL:
декодирование всех слотов пакета и остаточный бюджет шума шифротекста.
"""
from dataclasses import dataclass, field
from typing import Any, Mapping

import numpy as np
from tenseal import sealapi

from config import security_config as configured_security
from exceptions import ParameterError

SEC_LEVELS = {
    128: sealapi.SEC_LEVEL_TYPE.TC128,
    192: sealapi.SEC_LEVEL_TYPE.TC192,
    256: sealapi.SEC_LEVEL_TYPE.TC256,
}


class _EmptyCiphertext:
    """Шифротекст пустого набора данных"""

    def size(self):
        return 0

    def __repr__(self):
        return 'EMPTY_CIPHERTEXT'


EMPTY_CIPHERTEXT = _EmptyCiphertext()


def is_empty_ciphertext(ciphertext) -> bool:
    """Вырожденный шифротекст: заглушка, None или шифротекст нулевого размера"""
    if ciphertext is None or ciphertext is EMPTY_CIPHERTEXT:
        return True
    return ciphertext.size() == 0


@dataclass(frozen=True)
class SchemeParameters:
    poly_modulus_degree: int
    plain_modulus: int
    security_level: int
    context: Any = field(default=None, compare=False, repr=False)


class SealEngine:
    """Схема BFV с пакетным кодированием поверх tenseal.sealapi"""

    def derive_parameters(self, security_config: Mapping) -> SchemeParameters:
        """
        Строит параметры BFV и контекст SEAL.

        :param security_config: poly_modulus_degree, plain_modulus_bits, security_level
        :return: проверенные параметры схемы
        """
        degree = int(security_config['poly_modulus_degree'])
        plain_bits = int(security_config['plain_modulus_bits'])
        level = int(security_config.get('security_level', 128))
        if level not in SEC_LEVELS:
            raise ParameterError(f'unsupported security level: {level}')

        try:
            parms = sealapi.EncryptionParameters(sealapi.SCHEME_TYPE.BFV)
            parms.set_poly_modulus_degree(degree)
            parms.set_coeff_modulus(sealapi.CoeffModulus.BFVDefault(degree, SEC_LEVELS[level]))
            parms.set_plain_modulus(sealapi.PlainModulus.Batching(degree, plain_bits))
            context = sealapi.SEALContext(parms, True, SEC_LEVELS[level])
        except (ValueError, RuntimeError) as e:
            raise ParameterError(f'invalid BFV parameters: {e}') from e

        if not context.parameters_set():
            raise ParameterError(
                f'BFV parameters rejected (degree={degree}, plain bits={plain_bits})'
            )

        return SchemeParameters(
            poly_modulus_degree=degree,
            plain_modulus=parms.plain_modulus().value(),
            security_level=level,
            context=context,
        )

    def generate_key_pair(self, params: SchemeParameters):
        keygen = sealapi.KeyGenerator(params.context)
        secret_key = keygen.secret_key()
        public_key = sealapi.PublicKey()
        keygen.create_public_key(public_key)
        relin_keys = sealapi.RelinKeys()
        keygen.create_relin_keys(relin_keys)
        return secret_key, public_key, relin_keys

    def slot_count(self, params: SchemeParameters) -> int:
        return sealapi.BatchEncoder(params.context).slot_count()

    def encode_batch(self, values, params: SchemeParameters):
        plain = sealapi.Plaintext()
        sealapi.BatchEncoder(params.context).encode([int(v) for v in values], plain)
        return plain

    def decode_batch(self, plain, params: SchemeParameters) -> np.ndarray:
        decoded = sealapi.BatchEncoder(params.context).decode_uint64(plain)
        return np.asarray(decoded, dtype=np.uint64)

    def encrypt(self, plain, public_key, params: SchemeParameters):
        ciphertext = sealapi.Ciphertext(params.context)
        sealapi.Encryptor(params.context, public_key).encrypt(plain, ciphertext)
        return ciphertext

    def decrypt(self, ciphertext, secret_key, params: SchemeParameters):
        plain = sealapi.Plaintext()
        sealapi.Decryptor(params.context, secret_key).decrypt(ciphertext, plain)
        return plain

    def noise_budget(self, ciphertext, secret_key, params: SchemeParameters) -> int:
        """Оставшийся бюджет шума в битах"""
        decryptor = sealapi.Decryptor(params.context, secret_key)
        return decryptor.invariant_noise_budget(ciphertext)


default_engine = SealEngine()


def derive_parameters(security_config: Mapping = None, engine=None) -> SchemeParameters:
    """Параметры схемы из config.yaml, если security_config не передан"""
    if security_config is None:
        security_config = configured_security
    return (engine or default_engine).derive_parameters(security_config)
