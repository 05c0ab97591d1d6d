"""
FastAPI router module for skill coverage.

Key Endpoints:
- GET /skills/matrix: agent count per (enabled activity, skill level)
- GET /skills/agent: skill rows of the filtered active agents
"""

from typing import List

from fastapi import APIRouter

from wfm_dashboard.api.params import AgentFiltersDep, raise_http_error
from wfm_dashboard.core.dependencies import DBSessionDep
from wfm_dashboard.models.schemas import AgentSkill, SkillsMatrix
from wfm_dashboard.services.filters import normalize_agent_filters
from wfm_dashboard.services.skills import get_skills_matrix, list_agent_skills

router = APIRouter()


@router.get("/matrix", response_model=SkillsMatrix)
async def skills_matrix(db: DBSessionDep, filters: AgentFiltersDep) -> SkillsMatrix:
    try:
        agent_filter, _ = normalize_agent_filters(filters)
        return await get_skills_matrix(db, agent_filter)
    except Exception as e:
        raise_http_error(e, "Failed to fetch skills matrix")


@router.get("/agent", response_model=List[AgentSkill])
async def agent_skills(db: DBSessionDep, filters: AgentFiltersDep) -> List[AgentSkill]:
    try:
        agent_filter, _ = normalize_agent_filters(filters)
        return await list_agent_skills(db, agent_filter)
    except Exception as e:
        raise_http_error(e, "Failed to fetch agent skills")
