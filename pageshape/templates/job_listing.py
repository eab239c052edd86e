"""Job postings."""

from __future__ import annotations

from pageshape.extractors.detection import DetectionSignals
from pageshape.extractors.schema import field
from pageshape.extractors.transforms import as_flag, parse_date
from pageshape.extractors.validation import FieldValidation, is_url
from pageshape.templates.base import Template

SIGNALS = DetectionSignals(
    url_patterns=("/job/", "/jobs/", "/careers/", "/opening/", "/position/", "/vacancy/", "/apply/"),
    selectors=(
        '[itemtype*="JobPosting"]',
        '[itemtype*="schema.org/JobPosting"]',
        ".job-listing",
        ".job-posting",
        ".job-details",
        ".career-opportunity",
    ),
    required_elements=(
        ".job-title",
        '[itemprop="title"]',
        ".position-title",
        ".job-location",
        '[itemprop="jobLocation"]',
        ".apply-button",
        ".apply-now",
    ),
    keywords=(
        "apply now",
        "job description",
        "requirements",
        "qualifications",
        "salary",
        "benefits",
        "full-time",
        "part-time",
        "remote",
    ),
)

SCHEMA = {
    "title": field(
        'h1[itemprop="title"]', ".job-title", "h1.position-title", ".job-header h1", "[data-job-title]",
    ),
    "company": field(
        '[itemprop="hiringOrganization"]',
        ".company-name",
        ".employer-name",
        ".organization",
        "[data-company]",
    ),
    "location": field(
        '[itemprop="jobLocation"]', ".job-location", ".location", ".work-location", "[data-location]",
    ),
    # salary keeps the first dollar amount as written, e.g. "$120,000"
    "salary": field(
        '[itemprop="baseSalary"]', ".salary", ".salary-range", ".compensation", "[data-salary]",
        regex=r"\$[\d,]+",
    ),
    "employment_type": field(
        '[itemprop="employmentType"]',
        ".employment-type",
        ".job-type",
        ".work-type",
        ".contract-type",
    ),
    "description": field(
        '[itemprop="description"]',
        ".job-description",
        ".job-details",
        ".position-description",
        "#job-description",
    ),
    "requirements": field(
        ".requirements li",
        ".requirements",
        ".qualifications",
        ".job-requirements",
        ".required-skills",
        multiple=True,
    ),
    "benefits": field(
        ".benefits-list li", ".perks li", ".benefits", ".perks", ".job-benefits",
        multiple=True,
    ),
    "date_posted": field(
        '[itemprop="datePosted"]', ".posted-date", ".publish-date", ".job-posted", "time[datetime]",
        transform=parse_date,
    ),
    "valid_through": field(
        '[itemprop="validThrough"]', ".deadline", ".closing-date", ".expires",
        transform=parse_date,
    ),
    "experience_level": field(
        ".experience-level", ".seniority-level", ".experience-required", "[data-experience]",
    ),
    "education": field(
        ".education-required", ".education-level", ".degree-required", ".qualification",
    ),
    "department": field(".department", ".team", ".division", ".job-category"),
    "application_url": field(
        ".apply-button", ".apply-now", ".apply-link", '[href*="apply"]',
        attribute="href",
    ),
    "remote": field(
        ".remote-work", ".work-from-home", ".remote-position",
        contains=("remote", "work from home", "anywhere", "distributed"),
        transform=as_flag,
    ),
    "skills": field(
        ".skills-list li", ".skill-tag", ".skills", ".required-skills",
        multiple=True,
    ),
}

VALIDATION = {
    "title": FieldValidation(required=True, min_length=2, max_length=300),
    "application_url": FieldValidation(validator=is_url),
}

TEMPLATE = Template(
    name="job_listing",
    description="Extract job posting information",
    signals=SIGNALS,
    schema=SCHEMA,
    validation=VALIDATION,
)
