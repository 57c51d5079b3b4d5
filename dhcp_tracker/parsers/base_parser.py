from typing import Dict, Any, Iterator

class BaseParser:
    @classmethod
    def parse(cls, command: str, raw_text: str) -> Dict[str, Any]:
        raise NotImplementedError("Реализуйте метод parse в наследнике")

    @staticmethod
    def iter_blocks(raw_text: str) -> Iterator[Dict[str, str]]:
        """
        Разбивает вывод Format-List на блоки "Key : Value".
        Блоки разделены пустыми строками.
        """
        current = {}
        for line in raw_text.splitlines():
            line = line.strip()
            if not line:
                if current:
                    yield current
                current = {}
                continue

            if " : " in line:
                key, value = [x.strip() for x in line.split(" : ", 1)]
                current[key] = value
            elif line.endswith(" :"):
                # пустое значение, например "Description :"
                current[line[:-2].strip()] = ""

        if current:
            yield current
