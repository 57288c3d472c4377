"""Prompt templates, one pure renderer per flow.

Each renderer takes an already-validated request and returns the instruction
text. Optional sections are emitted only when their field is present. The
output JSON contract is appended by the flow, not here.
"""
from typing import Optional

from studyflow.models.assessment import TestAnalysisRequest, TestGenerationRequest
from studyflow.models.chat import ResolveQuestionRequest, SummarizeConversationRequest
from studyflow.models.flashcards import FlashcardSetRequest, QuestionAnswerRequest
from studyflow.models.planner import StudyPlanRequest
from studyflow.tools.postprocess import AnalysisQuestion, ScoringPolicy


def _optional_line(label: str, value: Optional[str]) -> list[str]:
    return [f"{label}: {value}"] if value else []


def render_resolve_question_prompt(request: ResolveQuestionRequest) -> str:
    lines = [
        "You are an expert AI assistant designed to answer student questions.",
        "",
        f"Question: {request.question}",
    ]
    if request.image:
        lines.append("An image accompanying the question is attached. Use it when answering.")
    lines += [
        "",
        "Answer in a comprehensive and easy-to-understand manner.",
        'Put the full answer in the "answer" field.',
    ]
    return "\n".join(lines)


def render_summarize_conversation_prompt(request: SummarizeConversationRequest) -> str:
    return f"""You are an AI assistant tasked with summarizing conversations for review.

Please provide a concise summary of the following conversation, highlighting the key topics discussed and any conclusions reached:

Conversation History:
{request.conversation_history}"""


def render_study_plan_prompt(
    request: StudyPlanRequest,
    current_date: str,
    preferred_study_days: Optional[str] = None,
) -> str:
    """
    Render the study plan prompt.

    Args:
        request: Validated study plan request
        current_date: Today's date (YYYY-MM-DD); no session may be scheduled before it
        preferred_study_days: Comma-joined preferred weekdays, or None for any day
    """
    exam_lines = []
    for exam in request.exams:
        line = f"- Subject: {exam.subject}, Date: {exam.date}"
        if exam.type:
            line += f", Type: {exam.type}"
        exam_lines.append(line)

    if request.weak_areas:
        weak_block = "Weak Areas:\n" + "\n".join(f"- {area}" for area in request.weak_areas)
    else:
        weak_block = "Weak Areas: None specified."

    details = [f"Learning Pace: {request.learning_pace}"]
    if request.study_hours_per_week:
        details.append(f"Preferred Study Hours Per Week: {request.study_hours_per_week:g}")
    details.append(f"Preferred Study Days: {preferred_study_days or 'Any day.'}")
    details += _optional_line("Additional Notes", request.notes)

    exams_block = "\n".join(exam_lines)
    details_block = "\n".join(details)

    return f"""You are an expert academic advisor AI specializing in creating personalized study plans.
Your goal is to generate a structured, actionable, and realistic study timetable for a student based on their input.
Today's date is {current_date}. Ensure all study plan dates are on or after this date.

Student's Input:
Exams/Deadlines:
{exams_block}

{weak_block}

{details_block}

Instructions for generating the plan:
1.  **Prioritize Weak Areas**: Allocate more time to subjects/topics listed as weak areas, especially in the initial phases of the plan. If no weak areas are specified, distribute time based on proximity to deadlines.
2.  **Work Backwards from Deadlines**: Ensure sufficient preparation time for each exam/deadline. Schedule more intensive review sessions closer to the exam dates. All exam dates provided are crucial.
3.  **Distribute Workload**: Spread study sessions evenly across available days, considering the learning pace and preferred study hours/days. Avoid overloading any single day. If specific study days are preferred, prioritize them.
4.  **Session Structure**:
    *   Create study sessions of reasonable length (e.g., 1-2 hours per subject block, but adapt based on student notes).
    *   Suggest specific activities for each session (e.g., "Read Chapter X", "Solve Y practice problems", "Outline essay points").
    *   Incorporate short breaks (10-15 minutes) when study blocks run longer than 2 hours or the notes ask for them. Mark breaks with "isBreak": true.
5.  **Learning Pace Adaptation**:
    *   'relaxed': Fewer hours, more spread out, longer lead times for exams.
    *   'moderate': Balanced approach.
    *   'intensive': More focused hours, potentially more frequent sessions, can be tighter to deadlines if necessary.
    *   If a weekly hour budget is given, adhere to it while ensuring adequate coverage for all exams. If not, suggest a reasonable amount based on the workload and pace.
6.  **Output Format**:
    *   List the days in 'dailySessions' chronologically. Each day MUST have a 'date' (YYYY-MM-DD) and an array of 'sessions'.
    *   Each session needs a clear 'subject', 'activity', 'date' (matching the parent day), 'startTime', and 'endTime' in "hh:mm AM/PM" format (e.g., "09:00 AM", "05:30 PM").
    *   Breaks use "isBreak": true and an activity like "Short break" or "Rest".
7.  **Start Date**: Start from {current_date} or the day after. No study sessions may be scheduled on a past date.
8.  **planTitle**: An encouraging title that reflects the student's goals (e.g., "Your Personalized Path to Exam Success!").
9.  **summaryNotes**: General advice, encouragement, or important considerations about executing the plan.

Generate the study plan."""


MATH_AND_CHEMISTRY_RULES = """- For mathematical equations or formulas:
  - Use single backticks for inline math, e.g., `E = mc^2`.
  - For larger or display-style equations, use fenced code blocks with a "math" hint, e.g.:
    ```math
    \\sum_{i=1}^{n} x_i = x_1 + x_2 + ... + x_n
    ```
- For chemical formulas or equations:
  - Use Unicode subscript and superscript characters where appropriate, e.g., H₂O, C₆H₁₂O₆, CO₂.
  - For reactions, represent them clearly, e.g., `2H₂ + O₂ -> 2H₂O`."""


def render_generate_test_prompt(request: TestGenerationRequest) -> str:
    header = [f"Title: {request.title}"]
    header += _optional_line("Subject", request.subject)
    header += _optional_line("Description/Topic", request.description)
    header_block = "\n".join(header)

    return f"""You are an expert test creator. Generate a test based on the following specifications.
{header_block}

Generate {request.num_subjective} subjective (essay or short answer) questions.
Generate {request.num_objective} objective (multiple choice) questions. For each objective question, provide 3-4 distinct options and clearly indicate the correct answer key and correct answer text.

Formatting Instructions for Questions:
- Ensure questions are relevant to the title, subject, and description.
- For objective questions, ensure options are plausible and there's one clear correct answer.
{MATH_AND_CHEMISTRY_RULES}
- Provide a unique string ID for each question (e.g., "q1", "q2") and for each option (e.g., "opt_a", "opt_b").
- For objective questions, set 'correctAnswerKey' to the ID of the correct option, and 'correctAnswerText' to the text of that correct option.
- For subjective questions, omit 'options' and 'correctAnswerKey'. Provide a concise model answer in 'correctAnswerText'."""


SCORING_INSTRUCTIONS = {
    ScoringPolicy.OBJECTIVE_ONLY: (
        "Calculate 'overallScore' as the percentage of objective questions answered correctly. "
        "Subjective questions do not count toward the overall score. "
        "If the test has no objective questions, set 'overallScore' to null."
    ),
    ScoringPolicy.BLENDED: (
        "Calculate 'overallScore' as a percentage where each objective question is worth 10 points "
        "(10 if correct, 0 otherwise) and each subjective question is worth its 'suggestedScoreOutOfTen'. "
        "Divide the points earned by 10 times the number of questions."
    ),
}


def _render_analysis_question(item: AnalysisQuestion) -> str:
    q = item.question
    lines = [
        "---",
        f"Question {item.display_number} (ID: {q.id}, Type: {q.type}):",
        f"Text: {q.question_text}",
    ]
    if q.options:
        lines.append("Options:")
        lines += [f"  - ({opt.id}) {opt.text}" for opt in q.options]
        lines.append(f"Correct Answer: {q.correct_answer_text or 'Not specified'}")
    else:
        lines.append(f"Model Answer (for subjective): {q.correct_answer_text or 'Not specified'}")
    lines.append(f"User's Answer: {item.user_answer_text}")
    lines.append("---")
    return "\n".join(lines)


def render_analyze_test_prompt(
    request: TestAnalysisRequest,
    questions: list[AnalysisQuestion],
    policy: ScoringPolicy,
) -> str:
    header = [f"Test Title: {request.test_title}"]
    header += _optional_line("Test Subject", request.test_subject)
    header += _optional_line("Test Description", request.test_description)
    header_block = "\n".join(header)
    questions_block = "\n".join(_render_analysis_question(item) for item in questions)

    return f"""You are an expert AI test evaluator. Analyze the following test results and provide a detailed report.

{header_block}

Instructions for Analysis:
1.  For each question, compare the user's answer with the correct answer.
2.  For 'objective' questions, the answer is correct only if the user's answer text exactly matches the correct option's text. Set 'isCorrect' accordingly.
3.  For 'subjective' questions, evaluate the user's answer against the question and the model answer. Provide a 'suggestedScoreOutOfTen' (0-10) and set 'isCorrect' to true only if the answer is substantially correct.
4.  Provide specific 'feedback' for each question, explaining why an answer is correct or incorrect, and offering suggestions for improvement.
5.  {SCORING_INSTRUCTIONS[policy]} The score must be between 0 and 100.
6.  Write 'overallFeedback' summarizing the user's performance, highlighting strengths, and suggesting areas for improvement.
7.  Return one entry in 'questionAnalyses' per question, using the question's ID as 'questionId' and the user's answer text shown below as 'userAnswerText'.

Questions & User Answers:
{questions_block}

Generate the analysis report."""


def render_flashcard_answer_prompt(request: QuestionAnswerRequest) -> str:
    return f"""You are an expert at creating concise and accurate answers for flashcards.
Given the following question, provide a suitable answer for the back of a flashcard.
The answer should be clear, correct, and directly address the question. Avoid overly long explanations.

Question: {request.question_text}

Generate the answer."""


def render_multiple_flashcards_prompt(request: FlashcardSetRequest) -> str:
    return f"""You are an expert in creating educational flashcards.
Given the following topic, generate a set of {request.number_of_cards} distinct flashcard question and answer pairs.
Each flashcard should consist of a clear question and a concise, accurate answer.
The questions should cover key concepts related to the topic.
The answers should directly address the questions.

Topic: {request.topic}

Generate {request.number_of_cards} flashcards.
Each flashcard is an object with "questionText" and "answerText"."""
