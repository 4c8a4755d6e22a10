# core/management/commands/seed_marketplace.py
from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from chat.models import Conversation, Message
from core.constants import EMPLOYER, FULL_TIME, PART_TIME, WORKER, country_name
from jobs.models import Job
from reviews.models import Review
from users.models import User
from workers.models import Skill

DEMO_PASSWORD = 'demo-password-123'

WORKERS = [
    {
        'email': 'maria@example.com', 'name': 'Maria Santos', 'country_code': 'PH',
        'headline': 'Experienced Virtual Assistant & Customer Service Specialist',
        'skills': ['Virtual Assistant', 'Customer Service', 'Data Entry', 'Email Marketing'],
        'rates': ('2', '3'), 'hours': 8, 'type': FULL_TIME, 'verified': True, 'active_hours_ago': 0,
        'bio': 'Detail-oriented professional with 5+ years of experience in virtual assistance. '
               'Skilled in managing calendars, email correspondence, data entry, and customer support.',
    },
    {
        'email': 'raj@example.com', 'name': 'Raj Patel', 'country_code': 'IN',
        'headline': 'Full Stack Web Developer & WordPress Expert',
        'skills': ['Web Development', 'WordPress', 'Shopify', 'SEO'],
        'rates': ('3', '5'), 'hours': 6, 'type': PART_TIME, 'verified': True, 'active_hours_ago': 2,
        'bio': 'Passionate web developer with expertise in building responsive websites. '
               'Specialized in WordPress, Shopify, and custom web applications.',
    },
    {
        'email': 'grace@example.com', 'name': 'Grace Okafor', 'country_code': 'NG',
        'headline': 'Content Writer & Social Media Manager',
        'skills': ['Content Writing', 'Social Media', 'SEO', 'Research'],
        'rates': ('1', '2'), 'hours': 8, 'type': FULL_TIME, 'verified': False, 'active_hours_ago': 24,
        'bio': 'Creative content writer with a knack for engaging storytelling. '
               'Experienced in managing social media accounts and creating SEO-optimized content.',
    },
    {
        'email': 'linh@example.com', 'name': 'Linh Nguyen', 'country_code': 'VN',
        'headline': 'Graphic Designer & Video Editor',
        'skills': ['Graphic Design', 'Video Editing', 'Social Media', 'PowerPoint'],
        'rates': ('2', '4'), 'hours': 5, 'type': PART_TIME, 'verified': True, 'active_hours_ago': 72,
        'bio': 'Creative designer with an eye for aesthetics. Proficient in Adobe Creative Suite '
               'and video editing software. Love bringing ideas to life.',
    },
    {
        'email': 'ahmed@example.com', 'name': 'Ahmed Hassan', 'country_code': 'PK',
        'headline': 'Data Entry Specialist & Bookkeeper',
        'skills': ['Data Entry', 'Bookkeeping', 'Excel', 'Administrative'],
        'rates': ('1', '2'), 'hours': 8, 'type': FULL_TIME, 'verified': True, 'active_hours_ago': 12,
        'bio': 'Meticulous data entry specialist with strong attention to detail. '
               'Experienced in bookkeeping and financial record management.',
    },
    {
        'email': 'sofia@example.com', 'name': 'Sofia Rodriguez', 'country_code': 'CO',
        'headline': 'Lead Generation & Research Specialist',
        'skills': ['Lead Generation', 'Research', 'Data Entry', 'Excel'],
        'rates': ('2', '3'), 'hours': 6, 'type': PART_TIME, 'verified': False, 'active_hours_ago': 6,
        'bio': 'Results-driven professional specializing in lead generation and market research. '
               'Skilled at finding qualified prospects and analyzing data.',
    },
]

EMPLOYERS = [
    {
        'email': 'hiring@growthlabs.example.com', 'company_name': 'Growth Labs', 'country_code': 'PH',
        'bio': 'Marketing agency helping small businesses grow online.',
    },
]

JOBS = [
    {
        'title': 'Virtual Assistant for E-commerce Store',
        'description': 'We need a reliable virtual assistant to manage customer emails, process orders, '
                       'and keep our product listings up to date.',
        'skills': ['Virtual Assistant', 'Customer Service', 'Shopify'],
        'rates': ('2', '4'), 'hours': 8,
    },
    {
        'title': 'WordPress Developer for Agency Websites',
        'description': 'Looking for a WordPress developer to build and maintain client websites, '
                       'including theme customisation and basic SEO setup.',
        'skills': ['WordPress', 'Web Development', 'SEO'],
        'rates': ('3', '6'), 'hours': 6,
    },
]


class Command(BaseCommand):
    help = 'Load demo workers, an employer, jobs, reviews and a conversation'

    @transaction.atomic
    def handle(self, *args, **options):
        now = timezone.now()
        workers = []
        for data in WORKERS:
            user, created = User.objects.get_or_create(email=data['email'], defaults={'user_type': WORKER})
            if created:
                user.set_password(DEMO_PASSWORD)
                user.save()
            profile = user.worker_profile
            profile.name = data['name']
            profile.country_code = data['country_code']
            profile.country = country_name(data['country_code'])
            profile.headline = data['headline']
            profile.hourly_rate_min, profile.hourly_rate_max = (Decimal(r) for r in data['rates'])
            profile.availability_hours = data['hours']
            profile.availability_type = data['type']
            profile.bio = data['bio']
            profile.is_verified = data['verified']
            profile.last_active = now - timedelta(hours=data['active_hours_ago'])
            profile.save()
            profile.skills.set([Skill.objects.get_or_create(name=name)[0] for name in data['skills']])
            workers.append(profile)
            self.stdout.write(f"{'Created' if created else 'Updated'} worker: {profile.name}")

        employers = []
        for data in EMPLOYERS:
            user, created = User.objects.get_or_create(email=data['email'], defaults={'user_type': EMPLOYER})
            if created:
                user.set_password(DEMO_PASSWORD)
                user.save()
            profile = user.employer_profile
            profile.company_name = data['company_name']
            profile.country_code = data['country_code']
            profile.country = country_name(data['country_code'])
            profile.bio = data['bio']
            profile.save()
            employers.append(profile)
            self.stdout.write(f"{'Created' if created else 'Updated'} employer: {profile.company_name}")

        employer = employers[0]
        for data in JOBS:
            job, created = Job.objects.get_or_create(
                employer=employer,
                title=data['title'],
                defaults={
                    'description': data['description'],
                    'hourly_rate_min': Decimal(data['rates'][0]),
                    'hourly_rate_max': Decimal(data['rates'][1]),
                    'availability_hours': data['hours'],
                },
            )
            job.skills.set([Skill.objects.get_or_create(name=name)[0] for name in data['skills']])
            if created:
                self.stdout.write(self.style.SUCCESS(f'Created job: {job.title}'))

        if not Review.objects.filter(worker=workers[0], employer=employer).exists():
            Review.objects.create(
                worker=workers[0], employer=employer, rating=5,
                comment='Maria was fantastic to work with, always on time and proactive.',
            )

        conversation, created = Conversation.objects.get_or_create(worker=workers[0], employer=employer)
        if created:
            message = Message.objects.create(
                conversation=conversation,
                sender=employer.user,
                content='Hi Maria, are you available for a new project next week?',
            )
            conversation.last_message = message.content
            conversation.last_message_at = message.created_at
            conversation.save(update_fields=['last_message', 'last_message_at'])

        self.stdout.write(self.style.SUCCESS('Marketplace demo data loaded!'))
