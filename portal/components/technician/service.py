"""
Technician Service
Job list and job lifecycle actions
"""
import logging

from portal.core.api_client import current_client
from portal.core.listing import fetch_list, mutate
from portal.core.validation import clean_text, validate_reason

logger = logging.getLogger(__name__)

# Action -> status shown on the job card once the action succeeds
JOB_STATUS = {
    'acknowledge': 'acknowledged',
    'on-the-way': 'on_the_way',
    'arrived': 'arrived',
    'start': 'in_progress',
    'complete': 'completed',
}


class TechnicianService:
    """Service for the technician component"""

    def list_jobs(self, query):
        return fetch_list('technician.jobs', '/technician/jobs', query)

    def get_job(self, job_id):
        return current_client().get(f'/technician/jobs/{job_id}')

    def get_job_stats(self):
        return current_client().get('/technician/jobs/stats')

    def get_history_stats(self):
        return current_client().get('/technician/jobs/history/stats')

    def job_action(self, job_id, action, notes=None):
        if action not in JOB_STATUS:
            raise ValueError(f'Unknown action: {action}')
        payload = {'notes': notes} if notes else {}
        result = mutate('technician.jobs', job_id, f'/technician/jobs/{job_id}/{action}',
                        payload=payload, changes={'technician_status': JOB_STATUS[action]})
        logger.info(f'Job {job_id}: {action}')
        return result

    def decline_job(self, job_id, reason):
        """Declined jobs go back to the vendor and leave the technician's list"""
        validate_reason(reason, message='Please provide a reason for declining')
        return mutate('technician.jobs', job_id, f'/technician/jobs/{job_id}/decline',
                      payload={'reason': clean_text(reason)}, remove=True)

    def add_job_note(self, job_id, note):
        validate_reason(note, field='note', message='Note cannot be empty')
        return current_client().post(f'/technician/jobs/{job_id}/notes', {'note': clean_text(note)})

    def get_availability(self):
        return current_client().get('/technician/availability')
