from fastapi import APIRouter, Depends, Request

from ..settings import Settings, get_settings

router = APIRouter(prefix="/api", tags=["config"])


@router.get("/config")
def get_config(request: Request, settings: Settings = Depends(get_settings)):
	config = request.app.state.marking_config
	content = request.app.state.content
	return {
		"ok": True,
		"questionText": content.question_for(config.min_words),
		"templateText": content.template_text,
		"targetWords": config.target_words,
		"minWordsGate": config.min_words,
		"maxWords": config.max_words,
		"courseBackUrl": settings.course_back_url,
		"nextLessonUrl": settings.next_lesson_url,
	}
