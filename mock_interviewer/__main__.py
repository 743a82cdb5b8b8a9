#!/usr/bin/env python3
"""
Main entry point for the mock interviewer.
Allows running the package with: python -m mock_interviewer
"""
import logging
import sys
from typing import Optional

from .config import get_config, ROLES
from .errors import MockInterviewError, ValidationError
from .infrastructure import GatewayClient, InterviewStore, ResumeStorage
from .interview import (
    InterviewSessionMachine, InterviewOracle, ProctoringSampler, FeedbackService,
    DashboardService, ResumeService, InterviewEventBus, EventLogger, InterviewMetrics, EventType,
)
from .utils import setup_logging

logger = logging.getLogger("main")


def _arg_value(name: str) -> Optional[str]:
    prefix = f"--{name}="
    for arg in sys.argv[1:]:
        if arg.startswith(prefix):
            return arg[len(prefix):]
    return None


def _ask_yes_no(prompt: str) -> bool:
    try:
        return input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")
    except EOFError:
        return False


def _choose_role() -> Optional[str]:
    print("\nSelect your target role:")
    role_ids = list(ROLES)
    for i, role_id in enumerate(role_ids, 1):
        print(f"  {i}. {ROLES[role_id]}")
    while True:
        try:
            choice = input("Role number: ").strip()
        except EOFError:
            return None
        if choice.isdigit() and 1 <= int(choice) <= len(role_ids):
            return role_ids[int(choice) - 1]
        if choice in ROLES:
            return choice
        print("❌ Please pick one of the listed roles")


def _print_dashboard(dashboard: DashboardService, user_id: str) -> None:
    summary = dashboard.summary(user_id)
    print("\n📊 Your progress")
    print(f"   Interviews: {summary['total_interviews']} ({summary['completed_interviews']} completed)")
    print(f"   Average score: {summary['average_score']}%")
    for metric, values in summary["skills"].items():
        print(f"   {metric.title():<11} you {values['user']:>3}%   platform {values['platform']:>3}%")
    if summary["recent_scores"]:
        print(f"   Recent scores: {', '.join(str(s) for s in summary['recent_scores'])}")


def _print_report(feedback: FeedbackService, user_id: str, interview_id: str) -> None:
    report = feedback.build_report(user_id, interview_id)
    print("\n" + "=" * 50)
    print(f"🏆 Overall Score: {report.overall_score}% ({report.label})")
    print("=" * 50)
    for i, answer in enumerate(report.answers, 1):
        print(f"\nQ{i}: {answer['question']}")
        print(f"   Relevance {answer['relevance']:.0f}%  Clarity {answer['clarity']:.0f}%  "
              f"Grammar {answer['grammar']:.0f}%  Confidence {answer['confidence']:.0f}%")
        print(f"   💡 {answer['feedback']}")
    if report.coaching:
        print("\n✅ Strengths:")
        for item in report.coaching.strengths:
            print(f"   - {item}")
        print("🔧 Areas to improve:")
        for item in report.coaching.weaknesses:
            print(f"   - {item}")
        print("🎯 Focus next time:")
        for item in report.coaching.focus_areas:
            print(f"   - {item}")
        print("📚 Recommended:")
        for item in report.coaching.recommendations:
            print(f"   - {item}")


def _on_penalty_event(event) -> None:
    if event.event_type == EventType.TAB_SWITCH_DETECTED:
        print(f"\n⚠️  Tab switch detected! 5% penalty applied. Total penalty: {event.data['total_penalty']}%")
    elif event.event_type == EventType.DEVICE_WARNING_RAISED:
        print(f"\n📱 External device detected ({', '.join(event.data['labels'])})! "
              f"10% penalty applied. Total penalty: {event.data['total_penalty']}%")


def run_interview(machine: InterviewSessionMachine, role: str, resume_hint: str) -> Optional[str]:
    """Drive one interview in the terminal. Returns the interview id when completed."""
    while True:
        print(f"\n🧠 Generating questions for {ROLES.get(role, role)}...")
        try:
            machine.begin(role, resume_hint=resume_hint)
            break
        except MockInterviewError as e:
            print(f"❌ {e.user_message}")
            if not _ask_yes_no("Try again?"):
                return None

    if machine.proctoring_enabled:
        print("📷 Camera enabled: this interview is proctored with AI device detection.")
        print("   External devices (phones, books, laptops) = 10% penalty each time")
    else:
        print("📷 Camera unavailable: continuing without device detection.")

    try:
        while machine.current_question is not None:
            total = len(machine.questions)
            question = machine.current_question
            print(f"\n❓ Question {machine.current_index + 1}/{total}: {question.text}")
            if question.answer is not None:
                print(f"   (your answer: {question.answer})")
                if not _ask_yes_no("Submit again?"):
                    return None
                answer = question.answer
            else:
                try:
                    answer = input("✍️  Your answer: ")
                except EOFError:
                    return None

            try:
                result = machine.advance(answer)
            except ValidationError as e:
                print(f"❌ {e}")
                continue
            except MockInterviewError as e:
                print(f"\n❌ Failed to submit interview: {e.user_message}")
                print("   Your answers are saved; you can retry submission.")
                continue

            if result is not None:
                print(f"\n🎯 Interview complete. Score: {result.overall_score}%"
                      f" (penalty {result.penalty_percent}%)")
                return result.session_id
        return None
    finally:
        machine.teardown()


def main():
    """Command-line interface for a proctored mock interview."""
    try:
        config = get_config()
    except ValueError as e:
        print(f"❌ Configuration Error: {e}")
        sys.exit(1)

    setup_logging(config.log_file, console_level=config.log_level)

    user_id = _arg_value("user") or "local-user"
    store = InterviewStore(config.data_dir)
    store.upsert_profile(user_id, name=_arg_value("name"))

    client = GatewayClient(config.oracle_api_key, base_url=config.oracle_base_url,
                           model=config.oracle_model, timeout=config.oracle_timeout)
    oracle = InterviewOracle(client)
    feedback = FeedbackService(store, oracle)
    dashboard = DashboardService(store)

    if "--dashboard" in sys.argv:
        _print_dashboard(dashboard, user_id)
        return

    report_id = _arg_value("feedback")
    if report_id:
        try:
            _print_report(feedback, user_id, report_id)
        except MockInterviewError as e:
            print(f"❌ {e}")
            sys.exit(1)
        return

    role = _arg_value("role") or _choose_role()
    if not role:
        return

    resume_hint = ""
    resume_path = _arg_value("resume")
    if resume_path:
        resumes = ResumeService(ResumeStorage(config.resume_dir))
        try:
            with open(resume_path, "rb") as f:
                hint = resumes.upload(user_id, resume_path, f.read())
            if hint:
                resume_hint = hint
                print(f"📄 {hint}")
        except (OSError, ValidationError) as e:
            print(f"❌ Resume not used: {e}")

    use_camera = config.enable_proctoring and "--no-camera" not in sys.argv
    sampler = None
    if use_camera:
        from .infrastructure.vision import CameraStream, YoloClassifier
        sampler = ProctoringSampler(
            camera=CameraStream(config.camera_index, config.camera_width, config.camera_height),
            classifier=YoloClassifier(config.detector_weights),
            interval=config.sample_interval,
            debounce=config.warning_debounce,
        )

    event_bus = InterviewEventBus()
    event_bus.subscribe_all(EventLogger().handle_event)
    metrics = InterviewMetrics()
    event_bus.subscribe_all(metrics.handle_event)
    event_bus.subscribe(EventType.TAB_SWITCH_DETECTED, _on_penalty_event)
    event_bus.subscribe(EventType.DEVICE_WARNING_RAISED, _on_penalty_event)

    machine = InterviewSessionMachine(oracle, store, user_id, sampler=sampler, event_bus=event_bus)
    print(f"📝 Detailed logs: {config.log_file}")

    interview_id = run_interview(machine, role, resume_hint)
    logger.info("Session event counts: %s", metrics.get_metrics())
    if interview_id:
        _print_report(feedback, user_id, interview_id)


if __name__ == "__main__":
    main()
