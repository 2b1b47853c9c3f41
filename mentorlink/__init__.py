"""MentorLink: mentorship matching API."""
