"""Fixed prompt text for flashcard generation.

The sample note/output pair is a one-shot demonstration: it anchors the
JSON schema the model must reply with.
"""

QUESTIONS_ANSWERS_KEY = "questions_answers"

OUTPUT_FORMAT_GUIDELINE = (
    '- output the questions and answers in the following JSON format '
    '{ "questions_answers": [{ "q": "<generated question>", "a": "<generated answer>" }] }'
)

TEXT_SYSTEM_PROMPT = """You will be provided notes on a specific topic. The notes are formatted in markdown. Based on the given notes, make a list of {num} questions and short answers that can be used for reviewing said notes by spaced repetition. Use the following guidelines:
{output_format}
- ensure that the questions cover the entire portion of the given notes, do not come up with similar questions or repeat the same questions
"""

MEDIA_SYSTEM_PROMPT = """You will be provided notes on a specific topic together with the images or documents embedded in them. The notes are formatted in markdown. Based on the given notes and the attached media, make a list of {num} questions and short answers that can be used for reviewing said notes by spaced repetition. Use the following guidelines:
{output_format}
- describe the relevant visual content of the attached media (diagrams, charts, labels, figures) and use it as source material
- include questions that test both textual and visual understanding
- ensure that the questions cover the entire portion of the given notes and media, do not come up with similar questions or repeat the same questions
"""

FILE_SYSTEM_PROMPT = """You will be provided a single file, either an image or a document. Analyze this file carefully, including any text, diagrams, charts, tables and visual details it contains. Based on the file, make a list of {num} questions and short answers that can be used for reviewing its content by spaced repetition. Use the following guidelines:
{output_format}
- describe what the file shows where it matters for a question, so that each answer can be understood without the file
- ensure that the questions cover all key information in the file, do not come up with similar questions or repeat the same questions
"""

FILE_PREAMBLE = "Analyze the attached file: {name}"

SAMPLE_NOTE = """A numeral system is a writing system for expressing numbers. It is a mathematical notation for representing numbers of a given set, using digits or other symbols in a consistent manner.

Ideally, a numeral system will:
- represent a useful set of numbers (eg: integers, rational numbers)
- give every number represented a unique representation
- reflect the algebraic and arithmetic structure of the numbers

#### Positional Notation
> also known as the "place-value notation"

Uses a **radix**/**base** (eg: base 10) to indicate the number of unique *digits* that are used to represent numbers in a position until the position of the digit is used to signify a power of the *base* number.

- Positional Systems with Base 2: [[Binary Numeral System]]
- Positional Systems with Base 8: Octal Numeral System
- Positional Systems with Base 10: Decimal Numeral System
- Positional Systems with Base 12: Duodecimal (dozenal) Numeral System
- Positional Systems with Base 16: Hexadecimal Numeral System
- Positional Systems with Base 20: Vigesimal Numeral System
- Positional Systems with Base 60: Sexagesimal Numeral System
"""

SAMPLE_OUTPUT: tuple[dict[str, str], ...] = (
    {"q": "What is a numeral system?", "a": "A numeral system is a writing system for expressing numbers, using digits or other symbols in a consistent manner."},
    {"q": "What is the goal of a numeral system?", "a": "The goal of a numeral system is to represent a useful set of numbers (eg: integers, rational numbers), give every number represented a unique representation, and reflect the algebraic and arithmetic structure of the numbers."},
    {"q": "What is a positional notation also known as?", "a": "Place-value Notation"},
    {"q": "What is a radix/base used for in the context of positional notation?", "a": "To indicate the number of unique digits that are used to represent numbers in a position until the position of the digit is used to signify a power of the base number"},
    {"q": "What numeral system uses a base of 2?", "a": "Binary Numeral System"},
    {"q": "What numeral system uses a base of 8?", "a": "Octal Numeral System"},
    {"q": "What numeral system uses a base of 10?", "a": "Decimal Numeral System"},
    {"q": "What numeral system uses a base of 12?", "a": "Duodecimal Numeral System"},
    {"q": "What numeral system uses a base of 16?", "a": "Hexadecimal Numeral System"},
    {"q": "What numeral system uses a base of 20?", "a": "Vigesimal Numeral System"},
    {"q": "What numeral system uses a base of 60?", "a": "Sexagesimal Numeral System"},
    {"q": "What is binary number representation?", "a": "Binary number representation is a number expressed in the base-2 numeral system or binary numeral system."},
)
