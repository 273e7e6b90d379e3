import logging
import os

from config import output_path
from exceptions import DatasetError
from receiver import DatasetElement, check_fixed_width

logger = logging.getLogger("psi_receiver")


def convert_dataset(path):
    """
    Чтение набора из файла: одна битовая строка на строку, пустые строки пропускаются
    """
    with open(path, 'r') as f:
        dataset = [line.strip() for line in f if line.strip()]

    for lineno, bits in enumerate(dataset, start=1):
        if set(bits) - {'0', '1'}:
            raise DatasetError(f'{path}: entry {lineno} is not a bit-string: {bits!r}')

    logger.info('Прочитано %d элементов из %s', len(dataset), path)
    return dataset


def bitstring_to_long_dataset(dataset):
    """Перевод битовых строк в беззнаковые целые"""
    return [int(bits, 2) for bits in dataset]


def build_dataset(dataset):
    """
    Пары (битовая строка, целое) в исходном порядке.
    Все строки должны быть одной длины.
    """
    elements = tuple(DatasetElement.from_bits(bits) for bits in dataset)
    check_fixed_width(elements)
    return elements


def load_dataset(path):
    return build_dataset(convert_dataset(path))


def format_intersection(intersection):
    """Таблица пересечения: битовая строка | целое значение"""
    if not intersection:
        return 'The intersection between sender and receiver is null'

    middle_point = len(intersection[0]) + 2
    o_line = ['-'] * (2 * middle_point + 1)
    o_line[middle_point] = '|'
    o_line = ''.join(o_line)

    lines = ['Printing the intersection between the two datasets: (bitstring, integer value)', '', o_line]
    for bits in intersection:
        lines.append(f' {bits} | {int(bits, 2)}')
        lines.append(o_line)
    return '\n'.join(lines)


def print_intersection(intersection):
    print(format_intersection(intersection))


def write_result_on_file(intersection, path=None):
    """Запись пересечения в файл, по одной битовой строке на строку"""
    if path is None:
        path = output_path

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(path, 'w') as f:
        for bits in intersection:
            f.write(bits + '\n')

    logger.info('Пересечение записано в %s', path)
    return path
