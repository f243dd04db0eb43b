"""Prompts for dual-phase screening assessment.

Both templates ask for the same two-line answer shape, parsed by
parsing.parse_assessment_response:

    Score: 0.8
    Reasoning: ...
"""

RELEVANCE_PROMPT = """Assess the RELEVANCE of this research paper to the research question.
Relevance means: Does this paper discuss topics related to the research question?

Research Question: {question}

Paper Title: {title}
Abstract: {abstract}

Provide your assessment as a score from 0.0 to 1.0 and reasoning:
- 0.0-0.3: Not relevant - paper does not discuss related topics
- 0.4-0.6: Somewhat relevant - paper mentions related concepts
- 0.7-1.0: Highly relevant - paper directly discusses related topics

Format your response as:
Score: [0.0-1.0]
Reasoning: [Your explanation of why this score was assigned]"""

CONTRIBUTION_PROMPT = """Assess the CONTRIBUTION of this research paper to the research question.
Contribution means: Does this paper directly research and provide findings for the research question?

Research Question: {question}

Paper Title: {title}
Abstract: {abstract}

Provide your assessment as a score from 0.0 to 1.0 and reasoning:
- 0.0-0.3: No contribution - paper does not research this question
- 0.4-0.6: Limited contribution - paper provides some relevant findings
- 0.7-1.0: Strong contribution - paper directly researches this question with clear findings

Format your response as:
Score: [0.0-1.0]
Reasoning: [Your explanation of why this score was assigned]"""


def build_relevance_prompt(question: str, title: str, abstract: str) -> str:
    return RELEVANCE_PROMPT.format(question=question, title=title, abstract=abstract)


def build_contribution_prompt(question: str, title: str, abstract: str) -> str:
    return CONTRIBUTION_PROMPT.format(question=question, title=title, abstract=abstract)
