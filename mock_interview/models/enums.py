# mock_interview/models/enums.py
# 면접/사용자 도메인에서 쓰는 열거형
import enum


class Mode(str, enum.Enum):
    PRACTICE = "PRACTICE"   # 카테고리 단위 연습
    REAL = "REAL"           # 전체 카테고리 실전 모의면접


class Category(str, enum.Enum):
    LANGUAGE = "LANGUAGE"
    BACKEND = "BACKEND"
    FRONTEND = "FRONTEND"
    DATABASE = "DATABASE"
    NETWORK = "NETWORK"
    OPERATING_SYSTEM = "OPERATING_SYSTEM"
    DATA_STRUCTURE = "DATA_STRUCTURE"
    PERSONALITY = "PERSONALITY"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    Category.LANGUAGE: "프로그래밍 언어",
    Category.BACKEND: "백엔드",
    Category.FRONTEND: "프론트엔드",
    Category.DATABASE: "데이터베이스",
    Category.NETWORK: "네트워크",
    Category.OPERATING_SYSTEM: "운영체제",
    Category.DATA_STRUCTURE: "자료구조/알고리즘",
    Category.PERSONALITY: "인성",
}


class Level(str, enum.Enum):
    LV1 = "LV1"
    LV2 = "LV2"
    LV3 = "LV3"
    LV4 = "LV4"
    LV5 = "LV5"


class Language(str, enum.Enum):
    JAVA = "JAVA"
    PYTHON = "PYTHON"
    JAVASCRIPT = "JAVASCRIPT"
    KOTLIN = "KOTLIN"
    CPP = "CPP"


class Position(str, enum.Enum):
    BACKEND = "BACKEND"
    FRONTEND = "FRONTEND"
    FULLSTACK = "FULLSTACK"
    DATA = "DATA"
    MOBILE = "MOBILE"
