"""Prompt templates for the seller's caption and sales-advice generation."""

from __future__ import annotations

from string import Template

# --- Instagram caption for a finished piece ---

DESCRIPTION_PROMPT = Template(
    "Você é uma artesã que vende suas peças nas redes sociais. "
    "Crie uma legenda para Instagram sobre a venda de um(a) \"$piece_name\" "
    "que custa $final_price, feito(a) com $materials.\n"
    "A legenda deve:\n\n"
    "Ter tom humano, acolhedor e levemente persuasivo.\n\n"
    "Ter 2 a 4 parágrafos curtos, fáceis de ler no celular.\n\n"
    "Usar uma linguagem simples, com leve toque poético ou visual "
    "(descrevendo sensações, detalhes, cores).\n\n"
    "Terminar com uma chamada para ação que convida a pessoa a comprar "
    "ou perguntar mais detalhes.\n\n"
    "Usar no máximo 4 emojis relevantes e distribuídos com naturalidade.\n\n"
    "Evitar negrito, caixa alta ou excesso de pontuação."
)

# --- Practical selling tips ---

SUGGESTIONS_PROMPT = Template(
    "Crie 3 dicas práticas para ajudar a vender um(a) \"$piece_name\" "
    "que custa $final_price.\n"
    "As dicas devem:\n\n"
    "Ser claras, simples e aplicáveis imediatamente.\n\n"
    "Mostrar como valorizar o trabalho, comunicar benefícios e gerar urgência.\n\n"
    "Ter no máximo 2 frases cada, focando em impacto e ação.\n\n"
    "Ser numeradas (1., 2., 3.) para facilitar a leitura.\n\n"
    "Usar verbos no imperativo para estimular a ação "
    "(ex.: “Mostre”, “Destaque”, “Ofereça”).\n\n"
    "Evitar negrito, caixa alta ou excesso de pontuação."
)

MATERIALS_SEPARATOR = ", "


# Map of request type -> template
TEMPLATES: dict[str, Template] = {
    "description": DESCRIPTION_PROMPT,
    "suggestions": SUGGESTIONS_PROMPT,
}
