from __future__ import annotations

from .models import ChatMessage, EvaluationRequest, PromptPayload

EVALUATOR_PERSONA = "You are an expert HR recruiter and resume evaluator."

SCORING_RUBRIC = (
    "STRICT SCORING RUBRIC:\n"
    "- 90-100: Resume perfectly matches occupation with strong, measurable achievements.\n"
    "- 75-89: Resume is good but missing 1-2 key skills or measurable results.\n"
    "- 50-74: Resume shows some relevant experience but lacks multiple important requirements.\n"
    "- 25-49: Resume has little relevant experience or skills for the occupation.\n"
    "- 0-24: Resume is unrelated to the occupation.\n"
)

EVALUATION_JSON_SHAPE = (
    "Respond ONLY in valid JSON format:\n"
    "{\n"
    '  "score": number, // integer 0-100\n'
    '  "summary": string,\n'
    '  "strengths": string[],\n'
    '  "weaknesses": string[],\n'
    '  "missing_keywords": string[],\n'
    '  "rewrite_suggestions": [\n'
    "    {\n"
    '      "issue": string,\n'
    '      "original": string,\n'
    '      "improved": string\n'
    "    }\n"
    "  ]\n"
    "}\n"
)


def evaluation_user_prompt(occupation: str, resume_text: str) -> str:
    return (
        "You will receive a candidate's resume text and the target occupation.\n"
        "Compare the resume to the skills, experience, and keywords typically required "
        "for that occupation.\n"
        "\n"
        f"{SCORING_RUBRIC}"
        "\n"
        f"{EVALUATION_JSON_SHAPE}"
        "\n"
        f"Occupation: {occupation}\n"
        "Resume:\n"
        f"{resume_text}\n"
    )


def evaluation_prompt(request: EvaluationRequest) -> PromptPayload:
    return PromptPayload(
        messages=[
            ChatMessage(role="system", content=EVALUATOR_PERSONA),
            ChatMessage(
                role="user",
                content=evaluation_user_prompt(request.occupation, request.resume_text),
            ),
        ]
    )
