"""
Use Cases Layer (Business Operations)

Structure
---------
usecases/
├── auth/         # OTP sign-up and login
├── courses/      # Course creation, browsing and rosters
├── enrollment/   # Enrollment state machine and pending views
└── users/        # User administration

Import from subpackages:

    from eims.application.usecases.enrollment import ReviewEnrollmentUseCase
"""
