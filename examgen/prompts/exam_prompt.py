# examgen/prompts/exam_prompt.py
"""
Exam generation prompt (Brazilian public-service exam style).
- Output is always JSON ONLY; the example below is the only shape contract
  the model gets, the sanitizer covers the rest.
"""
from __future__ import annotations

import json

from examgen.core.constants import Defaults
from examgen.schemas.exam import GenerationRequest

EXAM_PROMPT_TMPL: str = """Você é um elaborador de provas de CONCURSO PÚBLICO brasileiro.

TAREFA
Crie um SIMULADO (estilo prova real) com {quantity} questões sobre: "{topic}".
Dificuldade: {difficulty}.
Banca/estilo: {board}{board_hint}

FORMATO (OBRIGATÓRIO)
Retorne APENAS um JSON válido (sem markdown, sem texto antes/depois), com EXATAMENTE esta estrutura:

{{
  "titulo": {title_json},
  "tema": {topic_json},
  "questoes": [
    {{
      "enunciado": "string",
      "alternativaA": "string",
      "alternativaB": "string",
      "alternativaC": "string",
      "alternativaD": "string",
      "gabarito": "A",
      "explicacao": "string",
      "dificuldade": {difficulty_json}
    }}
  ]
}}

REGRAS
- Questões objetivas, linguagem formal, pegadinhas moderadas.
- Evite questões genéricas; foque em pontos cobrados em concursos.
- Alternativas plausíveis, diferentes e mutuamente exclusivas.
- Apenas UMA alternativa correta (A, B, C ou D) em "gabarito".
- Explique o gabarito em 2 a 5 linhas, de forma técnica e direta.
- NÃO cite o modelo ou o provedor de IA (nada de "segundo o Gemini").
- NÃO invente número de artigo/lei específico se não tiver certeza.
- Aspas duplas no JSON, sem vírgulas finais, sem campos extras.
"""

MIXED_BOARD_HINT = ' (estilo "mista": misture estilos comuns de bancas de concursos)'


def build_exam_prompt(req: GenerationRequest) -> str:
    """GenerationRequest -> prompt text. Pure; same request, same prompt."""
    title = Defaults.TITLE_TEMPLATE.format(topic=req.topic)
    return EXAM_PROMPT_TMPL.format(
        quantity=req.quantity,
        topic=req.topic,
        difficulty=req.difficulty_level,
        board=req.exam_board_style,
        board_hint=MIXED_BOARD_HINT if req.is_mixed_board else "",
        title_json=json.dumps(title, ensure_ascii=False),
        topic_json=json.dumps(req.topic, ensure_ascii=False),
        difficulty_json=json.dumps(req.difficulty_level, ensure_ascii=False),
    ).strip()
