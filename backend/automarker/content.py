from __future__ import annotations

from pydantic import BaseModel, ConfigDict


QUESTION_TEXT = "\n".join([
	"Scenario - you are travelling to the city of Rome in June and you will be staying at a hotel in the city centre. You are there for 1 week and you want AI to produce a 7-day itinerary for your visit.",
	"",
	"A weak prompt would be:",
	"",
	"What will I see when I visit Rome?",
	"",
	"Your task is to rephrase this into a stronger prompt using the 4-stage structure covered earlier:",
	"",
	"Role: Tell AI who you are, or what role you want it to adopt.",
	"Task: What do you want AI to do?",
	"Context: Who is AI creating the content for?",
	"Format: How do you want the AI to present the information (structure, tone) - what specific information (constraints) are you requiring?",
])

TEMPLATE_TEXT = "\n".join(["Role:", "Task:", "Context:", "Format:"])

MODEL_ANSWER = "\n".join([
	"You are a tour guide for the city of Rome (role).",
	"Give me a 7 day itinerary that includes 3 days of sightseeing Rome’s main historical attractions, one full-day visit outside of Rome, and three days of walking/ shopping (task)",
	"I am travelling to Rome for the first time as a visitor and I will be staying there in the city centre for 1 week in June. (Context)",
	"Give me bullets for each suggestion, the distance from my hotel at [X] street, any entrance fees or costs, relevant tour operator, and how long I should allow for the visit. Ensure that if I am sightseeing in the morning, I’m doing something different in the afternoon, so that each day contains a mix of activities. (Format)",
])

LEARN_MORE_TEXT = "\n".join([
	"Here is a second example of using the 4-stage structure to improve your AI prompt:",
	"",
	"Scenario: You’ve just had a team meeting to discuss next year's budget and there are actions for the next two weeks. You want AI to help summarise the notes.",
	"",
	"Weak prompt:",
	"",
	"Summarise these notes.",
	"",
	"Strong prompt:",
	"",
	"You are a team leader. Summarise these meeting notes into 5 clear bullet points for colleagues who missed the budget meeting. Focus on key decisions and actions for the next two weeks. Use a professional tone.",
	"",
	"• Role: You are a team leader",
	"• Task: Summarise meeting notes and share key decisions and actions",
	"• Context: Colleagues who missed the meeting",
	"• Format: 5 bullet points, professional tone.",
])


class ExerciseContent(BaseModel):
	question_text: str = QUESTION_TEXT
	template_text: str = TEMPLATE_TEXT
	model_answer: str = MODEL_ANSWER
	learn_more_text: str = LEARN_MORE_TEXT

	model_config = ConfigDict(frozen=True, protected_namespaces=())

	def question_for(self, min_words: int) -> str:
		return f"{self.question_text}\n\nAim for at least {min_words} words."


ROME_ITINERARY = ExerciseContent()
