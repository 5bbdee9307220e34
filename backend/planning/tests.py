"""
Unit Tests for the Smart Planner.

This module covers task prioritization, daily schedule construction,
productivity analysis and the REST endpoints that expose them.
"""

from django.core.cache import cache
from django.test import TestCase, override_settings
from rest_framework.test import APITestCase
from rest_framework import status
from datetime import date, datetime, timedelta, timezone
import json

from .conf import default_preferences, planner_setting
from .domain import (
    ConfigurationError,
    ErrorCode,
    ScheduleSlot,
    Task,
    TaskPriority,
    TaskStatus,
    UserPreferences,
    WorkingHours,
    format_clock,
    parse_clock,
    validate_preferences,
)
from .prioritization import TaskPrioritizer, prioritize
from .productivity import (
    NO_TASKS_INSIGHT,
    NO_TASKS_RECOMMENDATION,
    ProductivityAnalyzer,
    analyze,
    energy_context,
)
from .scheduling import DailyScheduleBuilder, build_schedule


NOW = datetime(2025, 11, 3, 9, 0)
DAY = date(2025, 11, 3)


def make_task(task_id, priority=TaskPriority.MEDIUM, **kwargs):
    return Task(id=str(task_id), title=f'Task {task_id}', priority=priority, **kwargs)


def make_preferences(start='09:00', end='18:00', focus_time=90, break_time=15):
    return UserPreferences(
        working_hours=WorkingHours(start=start, end=end),
        focus_time=focus_time,
        break_time=break_time
    )


class ClockTests(TestCase):
    """Tests for HH:MM parsing and formatting."""

    def test_parse_clock(self):
        self.assertEqual(parse_clock('09:30'), 570)
        self.assertEqual(parse_clock('9:05'), 545)
        self.assertEqual(parse_clock('23:59'), 23 * 60 + 59)

    def test_parse_clock_rejects_malformed(self):
        for value in ['24:00', '9am', '09:60', '', '0930']:
            with self.assertRaises(ValueError):
                parse_clock(value)

    def test_format_clock_zero_pads(self):
        self.assertEqual(format_clock(545), '09:05')
        self.assertEqual(format_clock(0), '00:00')


class PrioritizationTests(TestCase):
    """Tests for the multi-key task ordering."""

    def test_priority_then_due_date(self):
        """Urgent, then medium with a deadline, then low."""
        tasks = [
            make_task('low', TaskPriority.LOW),
            make_task('urgent', TaskPriority.URGENT),
            make_task('medium', TaskPriority.MEDIUM, due_date=NOW + timedelta(days=1)),
        ]

        ordered = prioritize(tasks)
        self.assertEqual([t.id for t in ordered], ['urgent', 'medium', 'low'])

    def test_due_date_beats_estimate(self):
        """Earlier deadline wins regardless of estimated minutes."""
        later = make_task('later', TaskPriority.HIGH,
                          due_date=NOW + timedelta(days=5), estimated_minutes=20)
        sooner = make_task('sooner', TaskPriority.HIGH,
                           due_date=NOW + timedelta(days=2), estimated_minutes=90)

        ordered = prioritize([later, sooner])
        self.assertEqual([t.id for t in ordered], ['sooner', 'later'])

    def test_dated_task_before_undated(self):
        undated = make_task('undated', TaskPriority.HIGH, estimated_minutes=5)
        dated = make_task('dated', TaskPriority.HIGH,
                          due_date=NOW + timedelta(days=30), estimated_minutes=240)

        ordered = prioritize([undated, dated])
        self.assertEqual(ordered[0].id, 'dated')

    def test_shorter_estimate_first_unknown_last(self):
        tasks = [
            make_task('45', estimated_minutes=45),
            make_task('none'),
            make_task('10', estimated_minutes=10),
            make_task('zero', estimated_minutes=0),
        ]

        ordered = prioritize(tasks)
        self.assertEqual([t.id for t in ordered], ['10', '45', 'none', 'zero'])

    def test_ties_keep_input_order(self):
        tasks = [make_task(i, TaskPriority.LOW, estimated_minutes=30) for i in range(5)]

        ordered = prioritize(tasks)
        self.assertEqual([t.id for t in ordered], ['0', '1', '2', '3', '4'])

    def test_output_is_permutation(self):
        tasks = [
            make_task(i, priority, estimated_minutes=(i * 7) % 50 or None,
                      due_date=NOW + timedelta(days=i % 3) if i % 2 else None)
            for i, priority in enumerate(list(TaskPriority) * 3)
        ]

        ordered = prioritize(tasks)
        self.assertEqual(len(ordered), len(tasks))
        self.assertEqual(sorted(t.id for t in ordered), sorted(t.id for t in tasks))

    def test_priority_dominance(self):
        tasks = [
            make_task(f'{p.value}-{i}', p,
                      due_date=NOW + timedelta(days=i) if i else None,
                      estimated_minutes=10 * (3 - i))
            for i in range(3)
            for p in reversed(list(TaskPriority))
        ]

        ordered = prioritize(tasks)
        ranks = [t.priority.rank for t in ordered]
        self.assertEqual(ranks, sorted(ranks))

    def test_idempotent(self):
        tasks = [
            make_task('a', TaskPriority.LOW),
            make_task('b', TaskPriority.HIGH, estimated_minutes=30),
            make_task('c', TaskPriority.HIGH, due_date=NOW),
            make_task('d', TaskPriority.HIGH),
        ]

        once = prioritize(tasks)
        self.assertEqual(prioritize(once), once)

    def test_input_not_mutated(self):
        tasks = [make_task('low', TaskPriority.LOW), make_task('urgent', TaskPriority.URGENT)]
        snapshot = list(tasks)

        prioritize(tasks)
        self.assertEqual(tasks, snapshot)

    def test_empty_input(self):
        self.assertEqual(prioritize([]), [])

    def test_mixed_naive_and_aware_deadlines(self):
        aware = make_task('aware', due_date=datetime(2025, 11, 5, 9, 0, tzinfo=timezone.utc))
        naive = make_task('naive', due_date=datetime(2025, 11, 4, 9, 0))

        ordered = prioritize([aware, naive])
        self.assertEqual([t.id for t in ordered], ['naive', 'aware'])


class PreferenceValidationTests(TestCase):
    """Tests for scheduling preference validation."""

    def test_valid_preferences(self):
        self.assertEqual(validate_preferences(make_preferences()), [])

    def test_start_equal_to_end(self):
        errors = validate_preferences(make_preferences(start='09:00', end='09:00'))
        self.assertEqual([e.code for e in errors], [ErrorCode.ERR_INVALID_TIME_RANGE])

    def test_end_before_start(self):
        errors = validate_preferences(make_preferences(start='18:00', end='09:00'))
        self.assertEqual([e.code for e in errors], [ErrorCode.ERR_INVALID_TIME_RANGE])

    def test_malformed_time(self):
        errors = validate_preferences(make_preferences(start='9am'))
        self.assertEqual(errors[0].code, ErrorCode.ERR_INVALID_TIME)
        self.assertEqual(errors[0].field, 'working_hours.start')

    def test_non_positive_durations(self):
        errors = validate_preferences(make_preferences(focus_time=0, break_time=-5))
        self.assertEqual(
            [e.field for e in errors],
            ['focus_time', 'break_time']
        )
        self.assertTrue(all(e.code == ErrorCode.ERR_INVALID_DURATION for e in errors))


class DailyScheduleTests(TestCase):
    """Tests for the greedy daily schedule builder."""

    def assert_contiguous(self, schedule, preferences):
        slots = schedule.slots
        self.assertEqual(slots[0].start_time, preferences.working_hours.start)
        for current, following in zip(slots, slots[1:]):
            self.assertEqual(current.end_time, following.start_time)
        for slot in slots:
            self.assertLess(slot.start_time, slot.end_time)
            self.assertLessEqual(slot.end_time, preferences.working_hours.end)

    def test_two_hour_window_leaves_second_task_unscheduled(self):
        preferences = make_preferences('09:00', '11:00', focus_time=60, break_time=15)
        first = make_task(1, estimated_minutes=60)
        second = make_task(2, estimated_minutes=60)

        schedule = build_schedule([first, second], preferences, DAY)

        self.assertEqual(len(schedule.slots), 2)
        work, rest = schedule.slots
        self.assertEqual((work.start_time, work.end_time), ('09:00', '10:00'))
        self.assertEqual(work.task, first)
        self.assertTrue(rest.is_break)
        self.assertEqual((rest.start_time, rest.end_time), ('10:00', '10:15'))
        self.assertEqual(schedule.unscheduled_tasks, [second])

    def test_slots_are_contiguous_and_within_window(self):
        preferences = make_preferences()
        tasks = [
            make_task(i, list(TaskPriority)[i % 4], estimated_minutes=[25, 50, 120, None][i % 4])
            for i in range(12)
        ]

        schedule = build_schedule(tasks, preferences, DAY)

        self.assertTrue(schedule.slots)
        self.assert_contiguous(schedule, preferences)

    def test_every_slot_is_task_xor_break(self):
        schedule = build_schedule(
            [make_task(i, estimated_minutes=40) for i in range(6)],
            make_preferences(),
            DAY
        )

        for slot in schedule.slots:
            self.assertNotEqual(slot.is_break, slot.task is not None)

    def test_slot_rejects_task_and_break(self):
        with self.assertRaises(ValueError):
            ScheduleSlot('09:00', '10:00', task=make_task(1), is_break=True)
        with self.assertRaises(ValueError):
            ScheduleSlot('09:00', '10:00')

    def test_completed_and_cancelled_tasks_skipped(self):
        done = make_task('done', TaskPriority.URGENT, status=TaskStatus.COMPLETED)
        dropped = make_task('dropped', TaskPriority.URGENT, status=TaskStatus.CANCELLED)
        todo = make_task('todo', TaskPriority.LOW)
        started = make_task('started', TaskPriority.LOW, status=TaskStatus.IN_PROGRESS)

        schedule = build_schedule([done, dropped, todo, started], make_preferences(), DAY)

        self.assertEqual([t.id for t in schedule.scheduled_tasks], ['todo', 'started'])

    def test_urgent_work_packed_first(self):
        tasks = [
            make_task('low', TaskPriority.LOW, estimated_minutes=30),
            make_task('urgent', TaskPriority.URGENT, estimated_minutes=30),
        ]

        schedule = build_schedule(tasks, make_preferences(), DAY)

        self.assertEqual(schedule.slots[0].task.id, 'urgent')
        self.assertEqual(schedule.slots[0].start_time, '09:00')

    def test_unknown_estimates_default_to_focus_time(self):
        preferences = make_preferences('09:00', '12:00', focus_time=60, break_time=10)
        tasks = [make_task('none'), make_task('zero', estimated_minutes=0)]

        schedule = build_schedule(tasks, preferences, DAY)

        work = [s for s in schedule.slots if not s.is_break]
        self.assertEqual([s.duration_minutes for s in work], [60, 60])
        self.assertEqual(work[1].start_time, '10:10')

    def test_long_task_capped_to_one_focus_block(self):
        preferences = make_preferences(focus_time=90)
        schedule = build_schedule([make_task(1, estimated_minutes=150)], preferences, DAY)

        self.assertEqual(schedule.slots[0].duration_minutes, 90)
        self.assertTrue(any('more than one' in r for r in schedule.recommendations))

    def test_no_break_past_end_of_day(self):
        preferences = make_preferences('09:00', '10:00', focus_time=60, break_time=15)
        schedule = build_schedule([make_task(1, estimated_minutes=60)], preferences, DAY)

        self.assertEqual(len(schedule.slots), 1)
        self.assertFalse(schedule.slots[0].is_break)

    def test_break_may_end_exactly_at_end_of_day(self):
        preferences = make_preferences('09:00', '10:15', focus_time=60, break_time=15)
        schedule = build_schedule([make_task(1, estimated_minutes=60)], preferences, DAY)

        self.assertEqual(len(schedule.slots), 2)
        self.assertEqual(schedule.slots[-1].end_time, '10:15')
        self.assertTrue(schedule.slots[-1].is_break)

    def test_packing_stops_at_first_task_that_does_not_fit(self):
        """A shorter task later in priority order is not squeezed in."""
        preferences = make_preferences('09:00', '10:30', focus_time=60, break_time=15)
        tasks = [
            make_task('a', TaskPriority.HIGH, estimated_minutes=60),
            make_task('b', TaskPriority.MEDIUM, estimated_minutes=60),
            make_task('c', TaskPriority.LOW, estimated_minutes=10),
        ]

        schedule = build_schedule(tasks, preferences, DAY)

        self.assertEqual([t.id for t in schedule.scheduled_tasks], ['a'])
        self.assertEqual([t.id for t in schedule.unscheduled_tasks], ['b', 'c'])

    def test_zero_tasks(self):
        schedule = build_schedule([], make_preferences(), DAY)

        self.assertEqual(schedule.slots, [])
        self.assertEqual(schedule.productivity_score, 0)
        self.assertEqual(len(schedule.recommendations), 1)

    def test_invalid_preferences_raise(self):
        for preferences in [
            make_preferences('09:00', '09:00'),
            make_preferences('18:00', '09:00'),
            make_preferences('nine', '17:00'),
            make_preferences(focus_time=0),
            make_preferences(break_time=0),
        ]:
            with self.assertRaises(ConfigurationError):
                build_schedule([make_task(1)], preferences, DAY)

    def test_configuration_error_details(self):
        with self.assertRaises(ConfigurationError) as ctx:
            DailyScheduleBuilder(make_preferences('18:00', '09:00'))

        payload = ctx.exception.to_dict()
        self.assertEqual(payload['error_code'], ErrorCode.ERR_INVALID_PREFERENCES.value)
        self.assertEqual(payload['errors'][0]['field'], 'working_hours')

    def test_score_grows_with_filled_time(self):
        preferences = make_preferences()
        one = build_schedule([make_task(1, TaskPriority.LOW, estimated_minutes=60)],
                             preferences, DAY)
        two = build_schedule([make_task(i, TaskPriority.LOW, estimated_minutes=60)
                              for i in range(2)], preferences, DAY)

        self.assertGreater(two.productivity_score, one.productivity_score)

    def test_fully_packed_day(self):
        preferences = make_preferences('09:00', '10:00', focus_time=60)
        schedule = build_schedule(
            [make_task(1, TaskPriority.URGENT, estimated_minutes=60)], preferences, DAY
        )

        self.assertEqual(schedule.productivity_score, 100)
        self.assertTrue(any('fully packed' in r for r in schedule.recommendations))
        self.assertTrue(any('urgent work goes first' in r for r in schedule.recommendations))

    def test_idle_capacity_recommendation(self):
        schedule = build_schedule([make_task(1, estimated_minutes=30)], make_preferences(), DAY)

        self.assertLess(schedule.productivity_score, 50)
        self.assertTrue(any('idle capacity' in r for r in schedule.recommendations))

    def test_fragmented_day_recommendation(self):
        preferences = make_preferences(break_time=5)
        schedule = build_schedule(
            [make_task(i, estimated_minutes=10) for i in range(5)], preferences, DAY
        )

        self.assertTrue(any('fragment' in r for r in schedule.recommendations))

    def test_leftover_tasks_recommendation(self):
        preferences = make_preferences('09:00', '11:00', focus_time=60, break_time=15)
        schedule = build_schedule(
            [make_task(i, estimated_minutes=60) for i in range(3)], preferences, DAY
        )

        self.assertTrue(any('2 task(s) did not fit' in r for r in schedule.recommendations))

    def test_slot_datetimes_follow_reference_date(self):
        schedule = build_schedule(
            [make_task(1, estimated_minutes=30)], make_preferences(), datetime(2025, 11, 3, 15, 0)
        )

        self.assertEqual(schedule.date, DAY)
        self.assertEqual(schedule.slots[0].scheduled_start, datetime(2025, 11, 3, 9, 0))
        self.assertEqual(schedule.slots[0].scheduled_end, datetime(2025, 11, 3, 9, 30))

    def test_work_slots_explain_placement(self):
        schedule = build_schedule(
            [make_task(1, TaskPriority.URGENT, estimated_minutes=20)], make_preferences(), DAY
        )

        reason = schedule.slots[0].reason
        self.assertIn('urgent task', reason)
        self.assertIn('quick win', reason)
        self.assertEqual(schedule.slots[1].reason, '')

    def test_deterministic(self):
        tasks = [make_task(i, list(TaskPriority)[i % 4], estimated_minutes=15 * i or None)
                 for i in range(8)]

        first = build_schedule(tasks, make_preferences(), DAY)
        second = build_schedule(tasks, make_preferences(), DAY)

        self.assertEqual(first.slots, second.slots)
        self.assertEqual(first.productivity_score, second.productivity_score)
        self.assertEqual(first.recommendations, second.recommendations)

    def test_custom_prioritizer(self):
        class LowFirstPrioritizer(TaskPrioritizer):
            def sort_key(self, task):
                return -task.priority.rank

        tasks = [make_task('urgent', TaskPriority.URGENT), make_task('low', TaskPriority.LOW)]
        schedule = DailyScheduleBuilder(
            make_preferences(), prioritizer=LowFirstPrioritizer()
        ).build(tasks, DAY)

        self.assertEqual(schedule.slots[0].task.id, 'low')

    def test_nothing_fits_reports_leftover_tasks(self):
        preferences = make_preferences('09:00', '09:30', focus_time=60, break_time=15)
        big = make_task('big')

        schedule = build_schedule([big], preferences, DAY)

        self.assertEqual(schedule.slots, [])
        self.assertEqual(schedule.unscheduled_tasks, [big])
        self.assertFalse(any('No actionable tasks' in r for r in schedule.recommendations))
        self.assertTrue(any('1 task(s) did not fit' in r for r in schedule.recommendations))


class ProductivityAnalysisTests(TestCase):
    """Tests for the productivity analyzer."""

    def completed(self, task_id, priority=TaskPriority.MEDIUM, **kwargs):
        kwargs.setdefault('completed_at', NOW)
        return make_task(task_id, priority, status=TaskStatus.COMPLETED, **kwargs)

    def test_empty_input(self):
        analysis = analyze([])

        self.assertEqual(analysis.score, 0)
        self.assertEqual(analysis.insights, [NO_TASKS_INSIGHT])
        self.assertEqual(analysis.recommendations, [NO_TASKS_RECOMMENDATION])

    def test_empty_input_ignores_time_of_day(self):
        analysis = analyze([], current_time=NOW)
        self.assertEqual(analysis.recommendations, [NO_TASKS_RECOMMENDATION])

    def test_adding_urgent_task_never_decreases_score(self):
        tasks = [self.completed('first', TaskPriority.LOW)]
        previous = analyze(tasks).score

        for i in range(10):
            tasks.append(self.completed(f'urgent-{i}', TaskPriority.URGENT))
            score = analyze(tasks).score
            self.assertGreaterEqual(score, previous)
            if previous < 100:
                self.assertGreater(score, previous)
            previous = score

        self.assertEqual(previous, 100)

    def test_higher_priority_addition_scores_higher(self):
        base = [self.completed('base', TaskPriority.MEDIUM)]

        with_low = analyze(base + [self.completed('x', TaskPriority.LOW)]).score
        with_high = analyze(base + [self.completed('x', TaskPriority.HIGH)]).score
        with_urgent = analyze(base + [self.completed('x', TaskPriority.URGENT)]).score

        self.assertLess(with_low, with_high)
        self.assertLess(with_high, with_urgent)

    def test_score_bounded(self):
        tasks = [self.completed(i, TaskPriority.URGENT) for i in range(50)]
        self.assertEqual(ProductivityAnalyzer().calculate_score(tasks), 100)

    def test_insights_report_counts(self):
        tasks = [
            self.completed(1, TaskPriority.URGENT),
            self.completed(2, TaskPriority.HIGH),
            self.completed(3, TaskPriority.HIGH),
        ]

        analysis = analyze(tasks)

        self.assertEqual(analysis.insights[0], '✅ Completed 3 task(s)')
        self.assertTrue(any('1 urgent' in i for i in analysis.insights))
        self.assertTrue(any('2 high-priority' in i for i in analysis.insights))
        self.assertTrue(any('high priority' in i for i in analysis.insights))
        self.assertTrue(analysis.recommendations)

    def test_estimate_overrun(self):
        tasks = [self.completed(1, estimated_minutes=60, actual_minutes=90)]

        analysis = analyze(tasks)

        self.assertTrue(any('150%' in i for i in analysis.insights))
        self.assertTrue(any('over estimate' in r for r in analysis.recommendations))

    def test_low_impact_day_recommendation(self):
        analysis = analyze([self.completed(1, TaskPriority.LOW)])
        self.assertTrue(any('urgent or high-priority' in r for r in analysis.recommendations))

    def test_day_filter(self):
        tasks = [
            self.completed('today', completed_at=NOW),
            self.completed('yesterday', completed_at=NOW - timedelta(days=1)),
            self.completed('unknown', completed_at=None),
        ]

        analysis = analyze(tasks, day=DAY)
        self.assertEqual(analysis.insights[0], '✅ Completed 1 task(s)')

        nothing = analyze(tasks, day=DAY + timedelta(days=5))
        self.assertEqual(nothing.score, 0)
        self.assertEqual(nothing.insights, [NO_TASKS_INSIGHT])

    def test_time_of_day_recommendations(self):
        tasks = [self.completed(1, TaskPriority.URGENT)]

        morning = analyze(tasks, current_time=datetime(2025, 11, 3, 10, 0))
        lunch = analyze(tasks, current_time=datetime(2025, 11, 3, 13, 0))

        self.assertTrue(any('Peak productivity' in r for r in morning.recommendations))
        self.assertTrue(any('Energy is low' in r for r in lunch.recommendations))

    def test_deterministic_and_input_untouched(self):
        tasks = [self.completed(i, list(TaskPriority)[i % 4]) for i in range(6)]
        snapshot = list(tasks)

        self.assertEqual(analyze(tasks), analyze(tasks))
        self.assertEqual(tasks, snapshot)

    def test_energy_context(self):
        peak = energy_context(datetime(2025, 11, 3, 10, 0))
        night = energy_context(datetime(2025, 11, 3, 22, 0))

        self.assertEqual(peak['energy_level'], 'high')
        self.assertIn('urgent', peak['suggested_priorities'])
        self.assertIsNone(night['energy_level'])


class PlannerSettingsTests(TestCase):
    """Tests for planner configuration defaults."""

    def test_builtin_defaults(self):
        preferences = default_preferences()
        self.assertEqual(preferences.working_hours.start, '09:00')
        self.assertEqual(preferences.focus_time, 90)

    @override_settings(PLANNER={'FOCUS_TIME': 45})
    def test_partial_override_falls_back(self):
        self.assertEqual(planner_setting('FOCUS_TIME'), 45)
        self.assertEqual(planner_setting('BREAK_TIME'), 15)
        self.assertEqual(default_preferences().focus_time, 45)

    @override_settings(PLANNER={'WORKING_HOURS': {'start': '08:00'}})
    def test_partial_working_hours_override(self):
        hours = default_preferences().working_hours
        self.assertEqual((hours.start, hours.end), ('08:00', '18:00'))


class APIEndpointTests(APITestCase):
    """Tests for the API endpoints."""

    def setUp(self):
        cache.clear()

    def post(self, url, data):
        return self.client.post(url, data=json.dumps(data), content_type='application/json')

    def test_api_info_endpoint(self):
        response = self.client.get('/api/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('endpoints', response.data)
        self.assertIn('error_codes', response.data)

    def test_prioritize_endpoint_success(self):
        data = {
            'tasks': [
                {'id': 1, 'title': 'Low', 'priority': 'low'},
                {'id': 2, 'title': 'Urgent', 'priority': 'urgent'},
                {'id': 3, 'title': 'Medium', 'priority': 'medium', 'due_date': '2025-11-04'},
            ]
        }

        response = self.post('/api/tasks/prioritize/', data)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['success'])
        self.assertEqual([t['id'] for t in response.data['tasks']], ['2', '3', '1'])

    def test_prioritize_endpoint_empty_tasks(self):
        response = self.post('/api/tasks/prioritize/', {'tasks': []})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['success'])
        self.assertEqual(response.data['error_code'], ErrorCode.ERR_EMPTY_TASKS.value)

    def test_prioritize_endpoint_invalid_task(self):
        data = {'tasks': [{'id': 1, 'title': '  ', 'priority': 'critical'}]}

        response = self.post('/api/tasks/prioritize/', data)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error_code'], ErrorCode.ERR_MISSING_FIELD.value)

    def test_schedule_endpoint_success(self):
        data = {
            'tasks': [
                {'id': 1, 'title': 'Write report', 'estimated_minutes': 60},
                {'id': 2, 'title': 'Review PR', 'estimated_minutes': 60},
            ],
            'preferences': {
                'working_hours': {'start': '09:00', 'end': '11:00'},
                'focus_time': 60,
                'break_time': 15
            },
            'date': '2025-11-03'
        }

        response = self.post('/api/schedule/daily/', data)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        schedule = response.data['schedule']
        self.assertEqual(schedule['date'], '2025-11-03')
        self.assertEqual(len(schedule['slots']), 2)
        self.assertEqual(schedule['slots'][0]['task']['id'], '1')
        self.assertTrue(schedule['slots'][1]['is_break'])
        self.assertEqual([t['id'] for t in schedule['unscheduled_tasks']], ['2'])

    def test_schedule_endpoint_uses_default_preferences(self):
        data = {'tasks': [{'id': 1, 'title': 'Unknown length'}]}

        response = self.post('/api/schedule/daily/', data)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        first = response.data['schedule']['slots'][0]
        self.assertEqual((first['start_time'], first['end_time']), ('09:00', '10:30'))

    def test_schedule_endpoint_partial_working_hours(self):
        data = {
            'tasks': [{'id': 1, 'title': 'Early start'}],
            'preferences': {'working_hours': {'start': '08:00'}}
        }

        response = self.post('/api/schedule/daily/', data)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        first = response.data['schedule']['slots'][0]
        self.assertEqual((first['start_time'], first['end_time']), ('08:00', '09:30'))

    def test_schedule_endpoint_invalid_preferences(self):
        data = {
            'tasks': [{'id': 1, 'title': 'Task'}],
            'preferences': {'working_hours': {'start': '18:00', 'end': '09:00'}}
        }

        response = self.post('/api/schedule/daily/', data)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data['success'])
        self.assertEqual(response.data['error_code'], ErrorCode.ERR_INVALID_PREFERENCES.value)

    def test_schedule_endpoint_no_tasks(self):
        response = self.post('/api/schedule/daily/', {'tasks': []})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['schedule']['slots'], [])
        self.assertEqual(response.data['schedule']['productivity_score'], 0)

    def test_analyze_endpoint_empty(self):
        response = self.post('/api/productivity/analyze/', {'completed_tasks': []})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['analysis']['score'], 0)
        self.assertEqual(response.data['analysis']['insights'], [NO_TASKS_INSIGHT])

    def test_analyze_endpoint_success(self):
        data = {
            'completed_tasks': [
                {'id': 1, 'title': 'Ship fix', 'priority': 'urgent', 'status': 'completed',
                 'estimated_minutes': 30, 'actual_minutes': 45,
                 'completed_at': '2025-11-03T10:00:00Z'},
            ],
            'date': '2025-11-03'
        }

        response = self.post('/api/productivity/analyze/', data)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertGreater(response.data['analysis']['score'], 0)

    def test_time_context_endpoint(self):
        response = self.client.get('/api/productivity/time-context/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('message', response.data)
        self.assertIn('energy_level', response.data)
