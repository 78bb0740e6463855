from pydantic import BaseModel
from typing import List

# ------------------------------------------------------------
# Request models
# ------------------------------------------------------------
class ExplainRequest(BaseModel):
    question: str
    user_answer: str               # option text the user picked
    correct_answer: str
    all_answers: List[str] = []    # in display order, lettered a), b), ...


# ------------------------------------------------------------
# Response models
# ------------------------------------------------------------
class ExplainResponse(BaseModel):
    status: str
    explanation: str               # model text or a readable error message
