from random import sample

import config


def generate_sets_to_files(sender_path="sender.txt", receiver_path="receiver.txt",
                           sender_size=None, receiver_size=None,
                           intersection_size=None, element_bits=None):
    """
    Генерирует sender_set и receiver_set из битовых строк фиксированной длины
    с заданным пересечением и сохраняет их в текстовые файлы (каждый элемент на новой строке).
    """
    sender_size = config.sender_size if sender_size is None else sender_size
    receiver_size = config.receiver_size if receiver_size is None else receiver_size
    intersection_size = config.intersection_size if intersection_size is None else intersection_size
    element_bits = config.element_bits if element_bits is None else element_bits

    if intersection_size > min(sender_size, receiver_size):
        raise ValueError('intersection_size is larger than one of the sets')

    universe_bound = 2 ** element_bits
    total = sender_size + receiver_size - intersection_size
    if total > universe_bound:
        raise ValueError(f'{total} distinct elements do not fit in {element_bits} bits')

    # Общий пул различных элементов для обоих множеств
    element_pool = [format(x, f'0{element_bits}b') for x in sample(range(universe_bound), total)]

    intersection = element_pool[:intersection_size]

    sender_set = intersection + element_pool[intersection_size: sender_size]
    receiver_set = intersection + element_pool[sender_size: total]

    with open(sender_path, "w") as f:
        f.write("\n".join(sender_set))

    with open(receiver_path, "w") as f:
        f.write("\n".join(receiver_set))

    return sender_set, receiver_set
