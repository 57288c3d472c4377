"""Test generation and test analysis models."""
from typing import Literal, Optional

from pydantic import Field, model_validator

from studyflow.models.base import FlowModel

QuestionType = Literal["subjective", "objective"]


class TestQuestionOption(FlowModel):
    """One choice of a multiple-choice question."""
    __test__ = False

    id: str = Field(..., description='Unique ID for the option (e.g., "a", "b", "c").')
    text: str = Field(..., description="Text of the option.")


class TestQuestion(FlowModel):
    """
    A question of a generated or stored test.

    Objective questions always carry an ``options`` list (possibly empty) and,
    when ``correct_answer_key`` is set, it names exactly one option id.
    Subjective questions carry neither options nor a key.
    """
    __test__ = False

    id: str = Field(..., description="Unique ID for the question.")
    type: QuestionType = Field(..., description="Type of the question.")
    question_text: str = Field(..., description="The text of the question.")
    options: Optional[list[TestQuestionOption]] = Field(
        None, description="Options for multiple-choice questions."
    )
    correct_answer_key: Optional[str] = Field(
        None, description="The ID of the correct option for objective questions."
    )
    correct_answer_text: Optional[str] = Field(
        None,
        description="The text of the correct answer (for objective, text of correct option; "
                    "for subjective, a model answer).",
    )

    @model_validator(mode="after")
    def check_shape(self) -> "TestQuestion":
        if self.type == "subjective":
            self.options = None
            self.correct_answer_key = None
            return self

        if self.options is None:
            self.options = []
        option_ids = [opt.id for opt in self.options]
        if len(set(option_ids)) != len(option_ids):
            raise ValueError("option ids must be unique within a question")
        if self.correct_answer_key is not None and self.correct_answer_key not in option_ids:
            raise ValueError(
                f"correctAnswerKey '{self.correct_answer_key}' does not match any option id"
            )
        return self

    def option_text(self, option_id: str) -> Optional[str]:
        for opt in self.options or []:
            if opt.id == option_id:
                return opt.text
        return None


class TestGenerationRequest(FlowModel):
    """Input of the test generation flow."""
    __test__ = False

    title: str = Field(..., min_length=1, description="The title of the test.")
    subject: Optional[str] = Field(None, description="The subject the test covers.")
    description: Optional[str] = Field(None, description="A brief description or topic for the test.")
    num_subjective: int = Field(5, ge=0, description="Number of subjective (essay/short answer) questions.")
    num_objective: int = Field(5, ge=0, description="Number of objective (multiple choice) questions.")

    @property
    def total_questions(self) -> int:
        return self.num_subjective + self.num_objective


# Raw shapes the model may return; ids are backfilled afterwards.
class GeneratedOption(FlowModel):
    id: Optional[str] = Field(None, description='Unique ID for the option (e.g., "opt_a").')
    text: str = Field(..., description="Text of the option.")


class GeneratedQuestion(FlowModel):
    id: Optional[str] = Field(None, description='Unique ID for the question (e.g., "q1").')
    type: QuestionType = Field(..., description="Type of the question.")
    question_text: str = Field(..., description="The text of the question.")
    options: Optional[list[GeneratedOption]] = Field(
        None, description="3-4 options for objective questions; omitted for subjective ones."
    )
    correct_answer_key: Optional[str] = Field(
        None, description="The ID of the correct option for objective questions."
    )
    correct_answer_text: Optional[str] = Field(
        None, description="Text of the correct option, or a concise model answer for subjective questions."
    )


class GeneratedTest(FlowModel):
    questions: list[GeneratedQuestion] = Field(..., description="An array of generated test questions.")


class TestGenerationResult(FlowModel):
    """Output of the test generation flow."""
    __test__ = False

    questions: list[TestQuestion]


class TestAnalysisRequest(FlowModel):
    """A submitted test together with the user's raw answers."""
    __test__ = False

    test_title: str = Field(..., description="The title of the test.")
    test_subject: Optional[str] = Field(None, description="The subject the test covers.")
    test_description: Optional[str] = Field(None, description="A brief description or topic for the test.")
    questions: list[TestQuestion] = Field(..., description="An array of the test questions.")
    user_responses: dict[str, str] = Field(
        default_factory=dict,
        description="A map of questionId to the user's answer (optionId for objective, text for subjective).",
    )


class QuestionAnalysis(FlowModel):
    """Evaluation of one answered question."""
    question_id: str
    question_text: str
    user_answer_text: str = Field(
        ..., description="The user's full answer text (text of chosen option or written answer)."
    )
    correct_answer_text: Optional[str] = Field(None, description="The full text of the correct answer.")
    is_correct: bool = Field(..., description="Whether the user's answer was correct.")
    feedback: str = Field(..., description="Specific feedback on the user's answer to this question.")
    suggested_score_out_of_ten: Optional[float] = Field(
        None, ge=0, le=10, description="For subjective questions, the suggested score (0-10)."
    )


class ModelAnalysisReport(FlowModel):
    """Report shape the model is asked for; the overall score is recomputed afterwards."""
    overall_score: Optional[float] = Field(
        None, description="Overall percentage score (0-100). Null if not applicable."
    )
    overall_feedback: str = Field(
        ..., description="General feedback on the user's performance, strengths, and areas for improvement."
    )
    question_analyses: list[QuestionAnalysis] = Field(..., description="Detailed analysis for each question.")


class TestAnalysisReport(FlowModel):
    """Graded report for a submitted test."""
    __test__ = False

    overall_score: Optional[float] = Field(
        ..., ge=0, le=100, description="Overall percentage score. Null if not applicable."
    )
    overall_feedback: str = Field(
        ..., description="General feedback on the user's performance, strengths, and areas for improvement."
    )
    question_analyses: list[QuestionAnalysis] = Field(..., description="Detailed analysis for each question.")
