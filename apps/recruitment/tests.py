from apps.recruitment.models import AttachmentType, Candidate, JobPosting
from tests.base import APITestCase
from tests.factories import CandidateFactory, HiringStageFactory, JobPostingFactory

BASE_URL = '/api/v1/recruitment'


class CatalogueTests(APITestCase):

    def test_hiring_stage_duplicate_name(self):
        HiringStageFactory(name='Screening', code='SCREEN')

        response = self.post(f'{BASE_URL}/hiring-stages/', {'name': 'screening', 'code': 'SCR'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Hiring stage name already exists')

    def test_hiring_stage_duplicate_code(self):
        HiringStageFactory(name='Screening', code='SCREEN')

        response = self.post(f'{BASE_URL}/hiring-stages/', {'name': 'Phone Screen', 'code': 'screen'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Hiring stage code already exists')

    def test_attachment_type_code_is_upper_cased(self):
        response = self.post(f'{BASE_URL}/attachment-types/', {'name': 'Resume', 'code': 'cv'})

        self.assertEqual(response.status_code, 201)
        self.assertEqual(AttachmentType.objects.get().code, 'CV')


class JobPostingTests(APITestCase):

    def setUp(self):
        super().setUp()
        self.screen = HiringStageFactory(name='Screening', code='SCREEN', sequence_order=1)
        self.tech = HiringStageFactory(name='Technical', code='TECH', sequence_order=2)
        self.offer = HiringStageFactory(name='Offer', code='OFFER', sequence_order=3)
        self.resume = AttachmentType.objects.create(name='Resume', code='CV')

    def test_create_with_pipeline(self):
        response = self.post(f'{BASE_URL}/job-postings/', {
            'job_title': 'Backend Engineer',
            'description': 'Django services',
            'annual_salary_from': '900000',
            'annual_salary_to': '1500000',
            'hiring_stages': [
                {'hiring_stage': str(self.screen.pk), 'sequence': 1},
                {'hiring_stage': str(self.tech.pk), 'sequence': 2},
            ],
            'attachments_required': [{'attachment_type': str(self.resume.pk)}],
        })

        self.assertEqual(response.status_code, 201)
        data = response.json()['data']
        self.assertEqual([stage['hiring_stage_code'] for stage in data['hiring_stages']], ['SCREEN', 'TECH'])
        self.assertEqual(data['attachments_required'][0]['attachment_type_name'], 'Resume')
        self.assertIsNotNone(data['posting_date'])

    def test_update_replaces_pipeline(self):
        posting = JobPostingFactory()
        posting.posting_stages.create(hiring_stage=self.screen, sequence=1)
        posting.posting_stages.create(hiring_stage=self.tech, sequence=2)

        response = self.patch(f'{BASE_URL}/job-postings/{posting.pk}/', {
            'hiring_stages': [{'hiring_stage': str(self.offer.pk), 'sequence': 1}],
        })

        self.assertEqual(response.status_code, 200)
        self.assertEqual(list(posting.posting_stages.values_list('hiring_stage__code', flat=True)), ['OFFER'])

    def test_update_without_pipeline_keeps_it(self):
        posting = JobPostingFactory()
        posting.posting_stages.create(hiring_stage=self.screen, sequence=1)

        self.patch(f'{BASE_URL}/job-postings/{posting.pk}/', {'job_title': 'Platform Engineer'})

        self.assertEqual(posting.posting_stages.count(), 1)

    def test_repeated_stage_is_rejected(self):
        response = self.post(f'{BASE_URL}/job-postings/', {
            'job_title': 'QA Engineer',
            'hiring_stages': [
                {'hiring_stage': str(self.screen.pk)},
                {'hiring_stage': str(self.screen.pk)},
            ],
        })

        self.assertEqual(response.status_code, 400)
        self.assertFalse(JobPosting.objects.exists())

    def test_salary_range_order(self):
        response = self.post(f'{BASE_URL}/job-postings/', {
            'job_title': 'Designer',
            'annual_salary_from': '500000',
            'annual_salary_to': '400000',
        })

        self.assertEqual(response.status_code, 400)
        self.assertIn('annual_salary_to', response.json()['error']['details'])

    def test_closing_before_posting_date(self):
        response = self.post(f'{BASE_URL}/job-postings/', {
            'job_title': 'Designer',
            'posting_date': '2025-05-10',
            'closing_date': '2025-05-01',
        })

        self.assertEqual(response.status_code, 400)

    def test_dropdown_lists_active_postings(self):
        JobPostingFactory(job_title='Data Engineer')
        JobPostingFactory(job_title='Data Analyst', is_active=False)
        JobPostingFactory(job_title='Recruiter')

        response = self.get(f'{BASE_URL}/job-postings/dropdown/', {'search': 'data'})

        body = response.json()
        self.assertEqual(body['message'], 'Job postings retrieved successfully')
        self.assertEqual([row['job_title'] for row in body['data']], ['Data Engineer'])

    def test_dropdown_needs_only_read_access(self):
        user = self.make_user('job_posting_read')

        response = self.get(f'{BASE_URL}/job-postings/dropdown/', user=user)

        self.assertEqual(response.status_code, 200)


class CandidateTests(APITestCase):

    def setUp(self):
        super().setUp()
        self.screen = HiringStageFactory(code='SCREEN')
        self.tech = HiringStageFactory(code='TECH')
        self.outside = HiringStageFactory(code='OUTSIDE')
        self.posting = JobPostingFactory()
        self.posting.posting_stages.create(hiring_stage=self.screen, sequence=1)
        self.posting.posting_stages.create(hiring_stage=self.tech, sequence=2)

    def test_create_candidate(self):
        response = self.post(f'{BASE_URL}/candidates/', {
            'name': '  Ravi Kumar ',
            'email': 'ravi@example.com',
            'job_posting': str(self.posting.pk),
            'current_hiring_stage': str(self.screen.pk),
            'experience_years': '4.5',
        })

        self.assertEqual(response.status_code, 201)
        data = response.json()['data']
        self.assertEqual(data['name'], 'Ravi Kumar')
        self.assertEqual(data['status'], Candidate.STATUS_APPLIED)
        self.assertEqual(data['hiring_stage']['code'], 'SCREEN')

    def test_stage_outside_pipeline_is_rejected(self):
        response = self.post(f'{BASE_URL}/candidates/', {
            'name': 'Ravi Kumar',
            'email': 'ravi@example.com',
            'job_posting': str(self.posting.pk),
            'current_hiring_stage': str(self.outside.pk),
        })

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Hiring stage is not part of this job posting')

    def test_experience_range(self):
        response = self.post(f'{BASE_URL}/candidates/', {
            'name': 'Ravi Kumar', 'email': 'ravi@example.com', 'experience_years': '51',
        })

        self.assertEqual(response.status_code, 400)

    def test_move_stage(self):
        candidate = CandidateFactory(job_posting=self.posting, current_hiring_stage=self.screen)

        response = self.post(f'{BASE_URL}/candidates/{candidate.pk}/move-stage/', {
            'hiring_stage': str(self.tech.pk),
            'notes': 'Cleared screening',
        })

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['message'], 'Candidate moved to the next stage successfully')
        candidate.refresh_from_db()
        self.assertEqual(candidate.current_hiring_stage, self.tech)
        self.assertEqual(candidate.status, Candidate.STATUS_SCREENING)
        self.assertIn('Cleared screening', candidate.notes)

    def test_move_stage_outside_pipeline(self):
        candidate = CandidateFactory(job_posting=self.posting)

        response = self.post(f'{BASE_URL}/candidates/{candidate.pk}/move-stage/', {
            'hiring_stage': str(self.outside.pk),
        })

        self.assertEqual(response.status_code, 400)

    def test_closed_candidate_cannot_move(self):
        candidate = CandidateFactory(job_posting=self.posting, status=Candidate.STATUS_HIRED)

        response = self.post(f'{BASE_URL}/candidates/{candidate.pk}/move-stage/', {
            'hiring_stage': str(self.tech.pk),
        })

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Cannot move a candidate with status Hired')

    def test_move_stage_needs_update_permission(self):
        candidate = CandidateFactory(job_posting=self.posting)
        user = self.make_user('candidate_read')

        response = self.post(
            f'{BASE_URL}/candidates/{candidate.pk}/move-stage/', {'hiring_stage': str(self.tech.pk)}, user=user
        )

        self.assertEqual(response.status_code, 403)

    def test_list_filters_and_stats(self):
        CandidateFactory(job_posting=self.posting, current_hiring_stage=self.screen)
        CandidateFactory(job_posting=self.posting, status=Candidate.STATUS_INTERVIEW)
        CandidateFactory(status=Candidate.STATUS_REJECTED, is_active=False)

        body = self.get(f'{BASE_URL}/candidates/', {'stage': str(self.screen.pk)}).json()

        self.assertEqual(body['meta']['total'], 1)
        stats = body['stats']
        self.assertEqual(stats['total_candidates'], 3)
        self.assertEqual(stats['inactive_candidates'], 1)
        self.assertEqual(stats['by_status']['applied'], 1)
        self.assertEqual(stats['by_status']['interview'], 1)
        self.assertEqual(stats['by_status']['rejected'], 1)
        self.assertEqual(stats['by_status']['hired'], 0)
