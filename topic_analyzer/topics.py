"""
Тематики и словарь ключевых основ (stems).

Each topic owns an ordered list of lower-case stems. A token belongs to a
topic when it starts with one of the topic's stems; the order of topics and
of stems inside a topic decides which stem wins, so the table is kept as an
explicit sequence of pairs rather than a plain dict.
"""

from enum import Enum
from types import MappingProxyType
from typing import Iterable, List, Mapping, Sequence, Tuple


class Topic(Enum):
    """Fixed set of subject-matter topics, in tie-break order"""
    MEDICAL = "medical"
    HISTORICAL = "historical"
    PROGRAMMING = "programming"
    NETWORKS = "networks"
    CRYPTOGRAPHY = "cryptography"
    FINANCE = "finance"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    Topic.MEDICAL: "Медицинская",
    Topic.HISTORICAL: "Историческая",
    Topic.PROGRAMMING: "Программирование",
    Topic.NETWORKS: "Сети",
    Topic.CRYPTOGRAPHY: "Криптография",
    Topic.FINANCE: "Финансы",
}


class KeywordTable:
    """Immutable ordered table of (topic, stems) pairs"""

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[Tuple[Topic, Sequence[str]]]):
        frozen: List[Tuple[Topic, Tuple[str, ...]]] = []
        seen = set()
        for topic, stems in entries:
            if topic in seen:
                raise ValueError(f"Duplicate topic in keyword table: {topic.name}")
            seen.add(topic)
            stems = tuple(stems)
            for stem in stems:
                if not stem or stem != stem.lower():
                    raise ValueError(f"Keyword stem must be non-empty lower-case: {stem!r}")
            frozen.append((topic, stems))
        self._entries = tuple(frozen)

    def entries(self) -> Tuple[Tuple[Topic, Tuple[str, ...]], ...]:
        return self._entries

    def topics(self) -> Tuple[Topic, ...]:
        return tuple(topic for topic, _ in self._entries)

    def stems_for(self, topic: Topic) -> Tuple[str, ...]:
        for entry_topic, stems in self._entries:
            if entry_topic is topic:
                return stems
        return ()

    def as_mapping(self) -> Mapping[Topic, Tuple[str, ...]]:
        """Read-only snapshot view: topic -> stems (assignment raises TypeError)"""
        return MappingProxyType(dict(self._entries))

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"KeywordTable({', '.join(f'{t.name}={len(s)}' for t, s in self._entries)})"


# Словарь строится один раз при импорте и больше не изменяется.
DEFAULT_KEYWORDS = KeywordTable([
    (Topic.MEDICAL, [
        "медиц", "здоров", "болезн", "лечен", "пациент",
        "врач", "симптом", "анализ", "диагноз", "терап",
        "операц", "биолог", "орган", "клетк", "ткан", "сердц", "кров",
        "сосуд", "кислород", "дыхан", "легк", "газообмен", "анатом", "физиолог",
        "иммун", "инфекц", "вирус",
        "бактери", "ген", "геном", "диагност", "процедур",
        "реабилит", "профилак", "патолог", "хирург", "терапевт",
        "педиатр", "стоматолог", "невролог", "кардиолог",
        "онколог", "эпидем", "вакцин", "инъекц", "таблет",
        "препарат", "фармак", "рецепт", "больнич", "клиник",
        "амбулатор", "стационар", "скорая", "давлен", "пульс",
        "температур", "воспален", "перелом", "раствор", "шов",
    ]),
    (Topic.HISTORICAL, [
        "истор", "прошл", "древн", "эпох", "дата",
        "событ", "историк", "археолог", "импер", "революц",
        "войн", "культ", "средневеков", "античн", "новый времен", "современ",
        "первобытн", "феодал", "монар", "династ", "цар",
        "корол", "император", "полковод", "завоеван",
        "сражен", "битв", "договор", "пакт", "союз",
        "цивилиз", "государств", "общество", "класс",
        "сослов", "крепост", "реформа", "восстан", "бунт",
        "хронолог", "летопис", "архив", "документ", "артефакт",
        "памятник", "музей", "историограф", "первоисточник",
        "исследован", "традиц", "обыча", "обряд",
    ]),
    (Topic.PROGRAMMING, [
        "программ", "разработ", "код", "компьютер", "язык",
        "алгоритм", "система", "данн", "приложен", "java",
        "python", "c++", "code", "software", "hardware", "информац", "технолог",
        "it", "разработчик", "программист",
        "функц", "перемен", "класс", "объект", "метод",
        "интерфейс", "модул", "библиотек", "фреймворк",
        "база данн", "sql", "nosql", "веб", "backend",
        "frontend", "fullstack", "дебаг", "отладк", "компиляц",
        "интерпрет", "синтакс", "логик", "цикл", "услов",
        "рекурс", "массив", "список", "стек", "очеред",
        "дерев", "граф", "сорт", "поиск", "оптимиз",
        "гит", "github", "gitlab", "репозитор", "commit",
        "контрол верс", "ide", "сред", "развертыван", "deploy",
        "тест", "юнит-тест", "интеграц", "агл", "машин обучен",
        "нейросет", "искуствен интеллект", "кибербезопас",
    ]),
    (Topic.NETWORKS, [
        "сеть", "network", "tcp", "udp", "ip",
        "internet", "интернет", "маршрут", "протокол", "канал",
        "соединен", "трафик", "сервер", "клиент", "сетев",
        "lan", "wan", "vpn", "dns", "dhcp",
        "http", "https", "ftp", "ssh", "ssl",
        "tls", "web", "сайт", "браузер", "роутер",
        "маршрутизатор", "коммутатор", "switch", "хаб", "мост",
        "firewall", "брандмауэр", "порт", "сокет", "пакет",
        "кадр", "шифрован", "аутентиф", "авториз", "доступ",
        "пропускная способ", "задержк", "ping", "latency",
        "тополог", "звезд", "кольцо", "шин", "mesh",
        "беспровод", "wi-fi", "wifi", "bluetooth", "ethernet",
        "оптоволок", "коаксиал", "витая пара", "isp",
        "провайдер", "ddos", "атак", "сканирован", "порт",
    ]),
    (Topic.CRYPTOGRAPHY, [
        "крипт", "шифр", "шифров", "кодиров", "rsa",
        "aes", "des", "hash", "хэш", "шифран",
        "public key", "private key", "key", "криптограф", "криптоанал",
        "стойкост", "взлом",
        "дешифр", "расшифр", "криптосистем", "ключ",
        "открытый ключ", "закрытый ключ", "секретный ключ",
        "эллипт", "ecdh", "ecdsa", "blowfish", "twofish",
        "тройной des", "3des", "sha", "md5", "md4",
        "соле", "salt", "iv", "вектор инициализ", "подп",
        "электронная подп", "цифровая подп", "сертификат",
        "pki", "infosec", "кибербезопас", "confidential",
        "целост", "integrity", "доступ", "availability",
        "аутентич", "non-repud", "отказоустойчив",
        "протокол согласован", "key exchange", "diffie-hellman",
        "квант крипт", "post-quantum", "блокчейн", "blockchain",
        "майнинг", "консенсус", "proof of work", "proof of stake",
        "асимметрич", "симметрич", "stream cipher", "block cipher",
        "криптовалют", "биткоин", "ethereum", "monero", "privacy coin",
    ]),
    (Topic.FINANCE, [
        "финанс", "эконом", "банк", "валют", "цен",
        "рынок", "инвести", "кредит", "акци", "бирж",
        "налог", "бюджет", "рубл", "доллар", "евро",
        "crypto", "деньг", "капитал", "прибыл", "убыток", "доход",
        "расход", "счет", "вклад", "депоз", "ипотек",
        "заем", "долг", "обязательств", "актив", "пассив",
        "баланс", "отчет", "аудит", "бухгалтер", "трейд",
        "трейдер", "инвестор", "спекуля", "дивиденд",
        "облигац", "фьючерс", "опцион", "дериватив", "фонд",
        "etf", "взаимный фонд", "хедж-фонд", "ликвид",
        "волатиль", "риск", "доход", "ставк", "процент",
        "кредитная став", "рефинанс", "инфляц", "дефляц",
        "рецесс", "кризис", "санкц", "эмбарго", "тариф",
        "пошлин", "тамож", "транш", "платеж", "перевод",
        "swift", "пластиковая карт", "кэш", "налич",
        "безнал", "финтех", "fintech", "страхов", "страхован",
        "пенс", "пенсионный фонд", "мсфо", "gaap", "рсбу",
    ]),
])
