"""Interviews API wire schemas."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

log = logging.getLogger(__name__)


class ApiBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug(
            "Interviews API %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class ApiCompany(ApiBaseModel):
    id: int
    name: str


class ApiStage(ApiBaseModel):
    id: int
    stage: str


class ApiStageMethod(ApiBaseModel):
    id: int
    method: str


class ApiMetadata(ApiBaseModel):
    job_listing: str | None = Field(default=None, alias="jobListing")
    location: str | None = None


class ApiInterview(ApiBaseModel):
    id: int
    job_title: str = Field(alias="jobTitle")
    interviewer: str | None = None
    company: ApiCompany
    client_company: str | None = Field(default=None, alias="clientCompany")
    stage: ApiStage | None = None
    stage_method: ApiStageMethod | None = Field(default=None, alias="stageMethod")
    application_date: str = Field(alias="applicationDate")
    date: str | None = None
    deadline: str | None = None
    outcome: str | None = None
    notes: str | None = None
    metadata: ApiMetadata | None = None
    link: str | None = None


class ErrorResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str


class CreateInterviewRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    stage: str
    company_name: str = Field(alias="companyName")
    client_company: str | None = Field(default=None, alias="clientCompany")
    job_title: str = Field(alias="jobTitle")
    job_posting_link: str | None = Field(default=None, alias="jobPostingLink")
    date: str | None = None
    deadline: str | None = None
    interviewer: str | None = None
    location_type: str | None = Field(default=None, alias="locationType")
    interview_link: str | None = Field(default=None, alias="interviewLink")
    notes: str | None = None


class UpdateInterviewRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    outcome: str | None = None
    stage: str | None = None
    date: str | None = None
    deadline: str | None = None
    interviewer: str | None = None
    notes: str | None = None
    link: str | None = None


CompanyListAdapter = TypeAdapter(list[ApiCompany])
StageListAdapter = TypeAdapter(list[ApiStage])
StageMethodListAdapter = TypeAdapter(list[ApiStageMethod])
InterviewListAdapter = TypeAdapter(list[ApiInterview])
InterviewAdapter = TypeAdapter(ApiInterview)
