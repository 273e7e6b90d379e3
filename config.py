import logging
import os

import yaml

# Путь к файлу config.yaml (относительно текущего файла), можно переопределить через PSI_CONFIG
config_path = os.environ.get(
    'PSI_CONFIG', os.path.join(os.path.dirname(__file__), 'config.yaml')
)

# Загрузка конфигурации из YAML
with open(config_path, 'r') as file:
    config = yaml.safe_load(file)

# Параметры схемы
poly_modulus_degree = config['poly_modulus_degree']
plain_modulus_bits = config['plain_modulus_bits']
security_level = config.get('security_level', 128)

# Параметры наборов данных
element_bits = config['element_bits']
sender_size = config['sender_size']
receiver_size = config['receiver_size']
intersection_size = config['intersection_size']

output_path = config.get('output_path', 'output/intersection.txt')
log_level = config.get('log_level', 'INFO')

# Вычисляемые параметры
security_config = {
    'poly_modulus_degree': poly_modulus_degree,
    'plain_modulus_bits': plain_modulus_bits,
    'security_level': security_level,
}

# Настраиваем логирование
logging.basicConfig(
    level=getattr(logging, str(log_level).upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler()
    ]
)
