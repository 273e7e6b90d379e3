import logging

import numpy as np

from exceptions import (CapacityExceeded, EngineFailure, KeyGenerationFailure,
                        ParameterMismatch, PlaintextOverflow, SlotAlignmentError)
from he_engine import EMPTY_CIPHERTEXT, default_engine, is_empty_ciphertext
from receiver import ComputationResult, Receiver, empty_result

logger = logging.getLogger("psi_receiver")


def _check_parameters(receiver, scheme_parameters):
    """Параметры должны совпадать с теми, под которыми сгенерированы ключи"""
    if receiver.parameters is not None and receiver.parameters != scheme_parameters:
        raise ParameterMismatch(
            f'keys were generated for {receiver.parameters}, got {scheme_parameters}'
        )


def setup_keys(scheme_parameters, engine=None) -> Receiver:
    """Генерация секретного, открытого ключей и ключей релинеаризации получателя"""
    engine = engine or default_engine
    try:
        secret_key, public_key, relin_keys = engine.generate_key_pair(scheme_parameters)
    except Exception as e:
        raise KeyGenerationFailure(f'key generation failed: {e}') from e

    # Сами ключи не логируем и никуда не сохраняем
    logger.debug('Сгенерированы ключи получателя (poly_modulus_degree=%s)',
                 getattr(scheme_parameters, 'poly_modulus_degree', None))

    return Receiver(
        secret_key=secret_key,
        public_key=public_key,
        relin_keys=relin_keys,
        parameters=scheme_parameters,
    )


def encrypt_dataset(receiver, scheme_parameters, engine=None):
    """Шифрование набора получателя в один пакетный шифротекст"""
    engine = engine or default_engine
    _check_parameters(receiver, scheme_parameters)

    encoded = receiver.encoded_dataset()
    if not encoded:
        logger.info('Набор получателя пуст')
        return EMPTY_CIPHERTEXT

    slot_count = engine.slot_count(scheme_parameters)
    if len(encoded) > slot_count:
        raise CapacityExceeded(len(encoded), slot_count)

    plain_modulus = getattr(scheme_parameters, 'plain_modulus', None)
    if plain_modulus is not None:
        too_large = [i for i, value in enumerate(encoded) if value >= plain_modulus]
        if too_large:
            raise PlaintextOverflow(
                f'{len(too_large)} element(s) do not fit plain modulus {plain_modulus}, '
                f'first at index {too_large[0]}'
            )

    # Элемент i кладём в слот i, остальные слоты заполнены нулями
    batch_vector = np.zeros(slot_count, dtype=np.uint64)
    batch_vector[:len(encoded)] = np.asarray(encoded, dtype=np.uint64)

    try:
        plain = engine.encode_batch(batch_vector.tolist(), scheme_parameters)
        ciphertext = engine.encrypt(plain, receiver.public_key, scheme_parameters)
    except Exception as e:
        raise EngineFailure(f'dataset encryption failed: {e}') from e

    logger.info('Зашифровано %d элементов в %d слотах', len(encoded), slot_count)
    return ciphertext


def decrypt_and_intersect(receiver, sender_ciphertext, scheme_parameters, engine=None) -> ComputationResult:
    """Расшифровка ответа отправителя и формирование пересечения множеств"""
    engine = engine or default_engine
    _check_parameters(receiver, scheme_parameters)

    if is_empty_ciphertext(sender_ciphertext):
        logger.info('Шифротекст отправителя пуст')
        return empty_result()

    if not receiver.dataset:
        # Пустой набор: ответ отправителя не несёт информации о пересечении
        logger.info('Набор получателя пуст, ответ отправителя не расшифровывается')
        return empty_result()

    result = ComputationResult()

    try:
        plain = engine.decrypt(sender_ciphertext, receiver.secret_key, scheme_parameters)
        slots = np.asarray(engine.decode_batch(plain, scheme_parameters))
        noise_budget = engine.noise_budget(sender_ciphertext, receiver.secret_key, scheme_parameters)
    except Exception as e:
        raise EngineFailure(f'decryption of sender ciphertext failed: {e}') from e

    dataset = receiver.dataset
    if len(slots) < len(dataset):
        raise SlotAlignmentError(
            f'decoded {len(slots)} slots for a dataset of {len(dataset)} elements'
        )

    # Нулевое значение в слоте i означает, что элемент i есть у отправителя.
    # Слоты за пределами набора заполнены нулями при шифровании, их не смотрим
    matches = np.flatnonzero(slots[:len(dataset)] == 0)
    intersection = [dataset[i].bits for i in matches]

    logger.info('Бюджет шума в ответе отправителя: %d бит', noise_budget)
    if noise_budget <= 0:
        logger.warning('Бюджет шума исчерпан, пересечение может быть неверным')

    if intersection:
        logger.info('Размер пересечения: %d', len(intersection))
    else:
        logger.info('Пересечение множеств получателя и отправителя пусто')

    return result.populate(intersection, noise_budget)


def run_psi(receiver, scheme_parameters, sender, engine=None) -> ComputationResult:
    """
    Одна сессия протокола целиком.

    :param sender: вызываемый объект (шифротекст, ключи релинеаризации) -> шифротекст;
                   вызов блокирующий, транспорт на стороне вызывающего
    """
    query = encrypt_dataset(receiver, scheme_parameters, engine)
    if is_empty_ciphertext(query):
        return empty_result()

    answer = sender(query, receiver.relin_keys)
    return decrypt_and_intersect(receiver, answer, scheme_parameters, engine)
