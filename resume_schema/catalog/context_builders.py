# resume_schema/catalog/context_builders.py
"""
Default context builders

Item builders receive an item's field data, section builders receive a section
in its persisted (dict) form. Both also receive the whole document, which the
defaults do not need.
"""
from typing import Any, Callable, Dict, List, Mapping

ContextBuilder = Callable[[Any, Any], str]


def _item_data(item: Mapping[str, Any]) -> Mapping[str, Any]:
    """Field values of a dynamic item, or the legacy item itself"""
    data = item.get('data')
    return data if isinstance(data, Mapping) else item


def _section_items(section: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    return [_item_data(item) for item in section.get('items') or []]


def _join(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ', '.join(str(v) for v in value)
    return str(value) if value else ''


def _content(data: Any, all_data: Any = None) -> str:
    if not data:
        return ''
    if isinstance(data, str):
        return data
    content = data.get('content') if isinstance(data, Mapping) else None
    return content if isinstance(content, str) else ''


def _first_item_content(section: Mapping[str, Any]) -> str:
    items = _section_items(section)
    return (items[0].get('content') or '') if items else ''


# Summary / custom text

def summary_section(section, all_data=None) -> str:
    return f"## Summary\n{_first_item_content(section)}"


def custom_summary(section, all_data=None) -> str:
    return f"## {section.get('title') or 'Custom Section'}\n{_first_item_content(section)}"


def cover_letter_section(section, all_data=None) -> str:
    return f"## Cover Letter\n{_first_item_content(section)}"


# Experience

def job_title(data, all_data=None) -> str:
    return f"Job Title: {data.get('jobTitle') or 'Untitled Job'}"


def company_name(data, all_data=None) -> str:
    return f"Company: {data.get('company') or 'Unnamed Company'}"


def job_description(data, all_data=None) -> str:
    return (
        f"Job: {data.get('jobTitle') or 'Untitled Job'} at {data.get('company') or 'Unnamed Company'}\n"
        f"Description: {data.get('description') or ''}"
    )


def experience_item(data, all_data=None) -> str:
    return (
        f"- {data.get('jobTitle') or 'Untitled Job'} at {data.get('company') or 'Unnamed Company'}: "
        f"{data.get('description') or ''}"
    )


def experience_summary(section, all_data=None) -> str:
    items = '\n'.join(experience_item(item, all_data) for item in _section_items(section))
    return f"## Experience\n{items}"


# Education

def degree_name(data, all_data=None) -> str:
    return f"Degree: {data.get('degree') or 'Untitled Degree'}"


def institution_name(data, all_data=None) -> str:
    return f"Institution: {data.get('institution') or 'Unnamed Institution'}"


def education_details(data, all_data=None) -> str:
    return (
        f"Education: {data.get('degree') or 'Untitled Degree'} from "
        f"{data.get('institution') or 'Unnamed Institution'}\n"
        f"Details: {data.get('details') or ''}"
    )


def education_item(data, all_data=None) -> str:
    return (
        f"- {data.get('degree') or 'Untitled Degree'} from "
        f"{data.get('institution') or 'Unnamed Institution'}"
    )


def education_summary(section, all_data=None) -> str:
    items = '\n'.join(education_item(item, all_data) for item in _section_items(section))
    return f"## Education\n{items}"


# Skills

def skill_name(data, all_data=None) -> str:
    return f"Skill: {data.get('name') or 'Unnamed Skill'}"


def skill_item(data, all_data=None) -> str:
    return data.get('name') or 'Unnamed Skill'


def skills_summary(section, all_data=None) -> str:
    skills = ', '.join(item.get('name') or 'Unnamed Skill' for item in _section_items(section))
    return f"## Skills\n{skills}"


# Advanced skills

def skill_category(data, all_data=None) -> str:
    return f"Skill Category: {data.get('category')}, Skills: {_join(data.get('skills'))}"


def skill_list(data, all_data=None) -> str:
    return _join(data.get('skills'))


def skill_proficiency(data, all_data=None) -> str:
    return f"Proficiency: {data.get('proficiency') or 'Not specified'}"


def skill_experience(data, all_data=None) -> str:
    return f"Years of Experience: {data.get('yearsOfExperience') or 'Not specified'}"


def advanced_skills_item(data, all_data=None) -> str:
    proficiency = f" ({data['proficiency']})" if data.get('proficiency') else ''
    return f"{data.get('category')}: {_join(data.get('skills'))}{proficiency}"


def advanced_skills_summary(section, all_data=None) -> str:
    categories = '; '.join(
        f"{item.get('category')}: {_join(item.get('skills'))}" for item in _section_items(section)
    )
    return f"## Advanced Skills\n{categories}"


# Projects

def project_name(data, all_data=None) -> str:
    return f"Project: {data.get('name') or 'Untitled Project'}"


def project_description(data, all_data=None) -> str:
    return (
        f"Project: {data.get('name')}, Technologies: {_join(data.get('technologies'))}\n"
        f"Description: {data.get('description') or ''}"
    )


def project_technologies(data, all_data=None) -> str:
    return _join(data.get('technologies'))


def projects_item(data, all_data=None) -> str:
    return f"Project: {data.get('name')}, Tech: {_join(data.get('technologies'))}"


def projects_summary(section, all_data=None) -> str:
    projects = '; '.join(
        f"{item.get('name')}: {item.get('description') or ''}" for item in _section_items(section)
    )
    return f"## Projects\n{projects}"


# Certifications

def certification_name(data, all_data=None) -> str:
    return f"Certification: {data.get('name') or 'Unnamed Certification'}"


def certification_issuer(data, all_data=None) -> str:
    return f"Issuer: {data.get('issuer') or 'Unknown Issuer'}"


def certification_description(data, all_data=None) -> str:
    return (
        f"Certification: {data.get('name')} from {data.get('issuer')}\n"
        f"Description: {data.get('description') or ''}"
    )


def certifications_item(data, all_data=None) -> str:
    date = f" ({data['date']})" if data.get('date') else ''
    return f"{data.get('name')} from {data.get('issuer')}{date}"


def certifications_summary(section, all_data=None) -> str:
    certs = ', '.join(
        f"{item.get('name')} ({item.get('issuer')})" for item in _section_items(section)
    )
    return f"## Certifications\n{certs}"


# Volunteer

def volunteer_position(data, all_data=None) -> str:
    return f"Position: {data.get('position') or 'Untitled Position'}"


def volunteer_org(data, all_data=None) -> str:
    return f"Organization: {data.get('organization') or 'Unnamed Organization'}"


def volunteer_impact(data, all_data=None) -> str:
    return (
        f"Volunteer: {data.get('position') or 'Untitled Position'} at "
        f"{data.get('organization') or 'Unnamed Organization'}\n"
        f"Impact: {data.get('impact') or ''}"
    )


def volunteer_item(data, all_data=None) -> str:
    return (
        f"- {data.get('position') or 'Untitled Position'} at "
        f"{data.get('organization') or 'Unnamed Organization'}: {data.get('impact') or ''}"
    )


def volunteer_summary(section, all_data=None) -> str:
    items = '\n'.join(volunteer_item(item, all_data) for item in _section_items(section))
    return f"## Volunteer Experience\n{items}"


DEFAULT_CONTEXT_BUILDERS: Dict[str, ContextBuilder] = {
    'summary-content': _content,
    'summary-section': summary_section,
    'custom-content': _content,
    'custom-summary': custom_summary,
    'cover-letter-content': _content,
    'cover-letter-section': cover_letter_section,
    'job-title': job_title,
    'company-name': company_name,
    'job-description': job_description,
    'experience-item': experience_item,
    'experience-summary': experience_summary,
    'degree-name': degree_name,
    'institution-name': institution_name,
    'education-details': education_details,
    'education-item': education_item,
    'education-summary': education_summary,
    'skill-name': skill_name,
    'skill-item': skill_item,
    'skills-summary': skills_summary,
    'skill-category': skill_category,
    'skill-list': skill_list,
    'skill-proficiency': skill_proficiency,
    'skill-experience': skill_experience,
    'advanced-skills-item': advanced_skills_item,
    'advanced-skills-summary': advanced_skills_summary,
    'project-name': project_name,
    'project-description': project_description,
    'project-technologies': project_technologies,
    'projects-item': projects_item,
    'projects-summary': projects_summary,
    'certification-name': certification_name,
    'certification-issuer': certification_issuer,
    'certification-description': certification_description,
    'certifications-item': certifications_item,
    'certifications-summary': certifications_summary,
    'volunteer-position': volunteer_position,
    'volunteer-org': volunteer_org,
    'volunteer-impact': volunteer_impact,
    'volunteer-item': volunteer_item,
    'volunteer-summary': volunteer_summary,
}
